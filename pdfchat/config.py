"""
===================================================================================
                    CONFIG.PY - Environment Configuration
===================================================================================

Every setting comes from an environment variable (or the .env file next to
the project), with defaults that work against a local Redis + Qdrant:

    docker run -d -p 6379:6379 redis
    docker run -d -p 6333:6333 qdrant/qdrant

Both the API server and the RQ worker import this module, so they always
agree on the queue name, the collection name and the embedding model.

📌 IMPORTANT: Use the SAME embedding model for indexing AND querying!
             Vectors from two different models cannot be compared.
===================================================================================
"""

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
#                     QUEUE (Redis + RQ)
# =============================================================================

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
QUEUE_NAME = os.getenv("QUEUE_NAME", "file-upload-queue")
JOB_TIMEOUT = os.getenv("JOB_TIMEOUT", "10m")  # large PDFs take a while to embed

# =============================================================================
#                     VECTOR STORE (Qdrant)
# =============================================================================

QDRANT_URL = os.getenv("QDRANT_URL", "http://localhost:6333")
QDRANT_API_KEY = os.getenv("QDRANT_API_KEY")  # only needed for Qdrant Cloud
QDRANT_COLLECTION = os.getenv("QDRANT_COLLECTION", "pdf-docs")

# =============================================================================
#                     EMBEDDINGS + CHUNKING
# =============================================================================

EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "1000"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "200"))
RETRIEVAL_K = int(os.getenv("RETRIEVAL_K", "2"))

# =============================================================================
#                     CHAT COMPLETION API (OpenAI-compatible)
# =============================================================================

CHAT_API_BASE_URL = os.getenv("CHAT_API_BASE_URL", "https://openrouter.ai/api/v1")
CHAT_MODEL = os.getenv("CHAT_MODEL", "deepseek/deepseek-chat")
DEEPSEEK_API_KEY = os.getenv("DEEPSEEK_API_KEY")
SITE_URL = os.getenv("SITE_URL", "http://localhost:3000")
APP_NAME = os.getenv("APP_NAME", "RAG Application")

# =============================================================================
#                     FILE STORAGE
# =============================================================================

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")  # "local" or "cloudinary"
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
DOWNLOAD_TIMEOUT = int(os.getenv("DOWNLOAD_TIMEOUT", "60"))

CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "pdfs")

# =============================================================================
#                     SERVER
# =============================================================================

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

_logging_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stdout handler for the API server or the worker."""
    global _logging_configured
    if _logging_configured:
        return

    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    _logging_configured = True


def describe() -> dict:
    """
    📖 Configuration Summary
    ------------------------
    Effective settings with secrets reduced to set / not set, so the result
    is safe to log at startup or return from the /status endpoint.
    """
    return {
        "redis_url": REDIS_URL,
        "queue_name": QUEUE_NAME,
        "qdrant_url": QDRANT_URL,
        "qdrant_collection": QDRANT_COLLECTION,
        "qdrant_api_key_set": bool(QDRANT_API_KEY),
        "embedding_model": EMBEDDING_MODEL,
        "chunk_size": CHUNK_SIZE,
        "chunk_overlap": CHUNK_OVERLAP,
        "retrieval_k": RETRIEVAL_K,
        "chat_model": CHAT_MODEL,
        "chat_api_base_url": CHAT_API_BASE_URL,
        "chat_api_key_set": bool(DEEPSEEK_API_KEY),
        "storage_backend": STORAGE_BACKEND,
        "cloudinary_configured": bool(
            CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET
        ),
    }

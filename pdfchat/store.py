"""
===================================================================================
                STORE.PY - Embeddings + Qdrant Vector Store
===================================================================================

Both the worker (writing) and the chat route (searching) go through here, so
they always use the same embedding model and the same collection.

📌 TWO WAYS TO WRITE:
--------------------
    1. APPEND  → connect to the existing collection, add_documents()
    2. CREATE  → if step 1 failed (usually: collection missing),
                 from_documents() creates the collection with these chunks

There is no existence check before the append; the failure of the append IS
the check. Two workers racing on an empty Qdrant can both take the create
path.
===================================================================================
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_huggingface import HuggingFaceEmbeddings
from langchain_qdrant import QdrantVectorStore
from qdrant_client import QdrantClient

from pdfchat import config

logger = logging.getLogger(__name__)


@dataclass
class IndexResult:
    mode: str  # "append" or "create"
    count: int


def get_embeddings() -> Embeddings:
    """Local sentence-transformers model; no API key involved."""
    return HuggingFaceEmbeddings(model_name=config.EMBEDDING_MODEL)


def connection_kwargs() -> dict:
    kwargs = {
        "url": config.QDRANT_URL,
        "collection_name": config.QDRANT_COLLECTION,
    }
    # Add API key if provided (for Qdrant Cloud)
    if config.QDRANT_API_KEY:
        kwargs["api_key"] = config.QDRANT_API_KEY
    return kwargs


def connect(embeddings: Embeddings) -> QdrantVectorStore:
    """Connect to the EXISTING collection; raises if it is missing."""
    return QdrantVectorStore.from_existing_collection(embedding=embeddings, **connection_kwargs())


def write_chunks(chunks: List[Document], embeddings: Embeddings) -> IndexResult:
    try:
        logger.info("🔌 Connecting to Qdrant: %s", config.QDRANT_URL)
        vector_store = connect(embeddings)
        vector_store.add_documents(chunks)
        logger.info("✅ Added %d chunks to existing collection '%s'", len(chunks), config.QDRANT_COLLECTION)
        return IndexResult(mode="append", count=len(chunks))
    except Exception as e:
        logger.warning("⚠️ Collection '%s' not usable (%s), creating new...", config.QDRANT_COLLECTION, e)

    QdrantVectorStore.from_documents(documents=chunks, embedding=embeddings, **connection_kwargs())
    logger.info("✅ Created collection '%s' and stored %d chunks", config.QDRANT_COLLECTION, len(chunks))
    return IndexResult(mode="create", count=len(chunks))


def search(query: str, k: Optional[int] = None) -> List[Document]:
    """
    📖 Similarity Search
    --------------------
    Opens a fresh connection on every call. Nearest neighbours always come
    back, so an unrelated question still gets up to k chunks.
    """
    vector_store = connect(get_embeddings())
    return vector_store.similarity_search(query=query, k=k or config.RETRIEVAL_K)


def collection_stats() -> dict:
    client_kwargs = {"url": config.QDRANT_URL}
    if config.QDRANT_API_KEY:
        client_kwargs["api_key"] = config.QDRANT_API_KEY

    client = QdrantClient(**client_kwargs)
    collections = client.get_collections()
    names = [c.name for c in collections.collections]

    stats = {"collection_exists": config.QDRANT_COLLECTION in names, "collection_points": 0}
    if stats["collection_exists"]:
        info = client.get_collection(config.QDRANT_COLLECTION)
        stats["collection_points"] = info.points_count or 0
    return stats

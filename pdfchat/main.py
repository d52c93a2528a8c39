"""
API server entry point.

    pdfchat-api                     (console script)
    uvicorn pdfchat.main:app        (same thing, with uvicorn's own flags)

host="0.0.0.0" so Docker containers (Redis, Qdrant, frontend) can reach it.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfchat import config, connection, store
from pdfchat.rag_service import rag_router
from pdfchat.upload_service import upload_router

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="PDF Chat RAG", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in config.CORS_ORIGINS.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router)
app.include_router(rag_router)


@app.get("/")
def root():
    return {"status": "All good"}


@app.get("/status")
def service_status():
    """
    📖 Service Status (Diagnostic)
    ------------------------------
    Effective configuration plus whether Redis and Qdrant answer. Problems
    show up as *_error fields instead of failing the request.
    """
    status = {
        "config": config.describe(),
        "redis_connected": False,
        "qdrant_connected": False,
        "collection_exists": False,
        "collection_points": 0,
    }

    try:
        connection.get_redis().ping()
        status["redis_connected"] = True
    except Exception as e:
        status["redis_error"] = str(e)

    try:
        status.update(store.collection_stats())
        status["qdrant_connected"] = True
    except Exception as e:
        status["qdrant_error"] = str(e)

    return status


def main():
    logger.info("🚀 Starting API on %s:%d", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()

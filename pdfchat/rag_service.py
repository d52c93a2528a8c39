"""
===================================================================================
                    RAG_SERVICE.PY - Chat Over the Indexed PDFs
===================================================================================

QUERYING (every time a user asks a question)
--------------------------------------------
    User Question
        ↓
    Embed the question + similarity search in Qdrant (top k=2)
        ↓
    Put the chunk texts into ONE system prompt
        ↓
    Send (system prompt + question) to the chat model
        ↓
    Return the answer + the chunks that were used

The chat model is reached through an OpenAI-compatible endpoint
(OpenRouter by default), so the official openai client works unchanged;
only base_url, api_key and two OpenRouter headers differ.
===================================================================================
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from langchain_core.documents import Document
from openai import APIStatusError, OpenAI
from pydantic import BaseModel

from pdfchat import config, store

logger = logging.getLogger(__name__)

rag_router = APIRouter(prefix="", tags=["RAG"])


class ChatRequest(BaseModel):
    query: Optional[str] = None


def build_system_prompt(docs: List[Document]) -> str:
    context = "\n".join(doc.page_content for doc in docs)
    return (
        "You are a helpful AI Agent. Use the provided documents to answer user queries.\n"
        "Answer only from the context below. Do not mention document sources in your answer.\n"
        f"Context: {context}"
    )


def get_chat_client() -> OpenAI:
    return OpenAI(
        base_url=config.CHAT_API_BASE_URL,
        api_key=config.DEEPSEEK_API_KEY,
        default_headers={
            "HTTP-Referer": config.SITE_URL,
            "X-Title": config.APP_NAME,
        },
    )


def upstream_error(exc: Exception):
    """
    📖 What Went Wrong Upstream?
    ----------------------------
    For HTTP errors from the chat API we pass its JSON error body through
    (falling back to the raw response text); for everything else the
    exception message is all we have.
    """
    if isinstance(exc, APIStatusError):
        if exc.body is not None:
            return exc.body
        return exc.response.text
    return str(exc)


def answer_query(query: str) -> dict:
    docs = store.search(query, k=config.RETRIEVAL_K)
    logger.info("🔍 Retrieved %d chunks for query", len(docs))

    completion = get_chat_client().chat.completions.create(
        model=config.CHAT_MODEL,
        messages=[
            {"role": "system", "content": build_system_prompt(docs)},
            {"role": "user", "content": query},
        ],
    )

    return {
        "answer": completion.choices[0].message.content,
        "docs": [{"pageContent": doc.page_content} for doc in docs],
    }


@rag_router.post("/chat")
def chat(payload: Optional[ChatRequest] = None):
    """
    HTTP POST to: http://localhost:8000/chat
    Body: { "query": "What is this document about?" }
    """
    if payload is None or not payload.query or not payload.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    try:
        return answer_query(payload.query)
    except Exception as err:
        details = upstream_error(err)
        logger.error("❌ Error in chat endpoint: %s", details)
        raise HTTPException(
            status_code=500,
            detail={"error": "Internal server error", "details": details},
        )

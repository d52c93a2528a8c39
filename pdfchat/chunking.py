"""
===================================================================================
                CHUNKING.PY - PDF Pages → Overlapping Chunks
===================================================================================

    PDF File
        ↓
    Extract Text (page by page)           load_pages()
        ↓
    Split into Chunks                     split_pages()
        ↓
    (embeddings + Qdrant happen in store.py)

📌 WHY A SLIDING WINDOW?
-----------------------
Every chunk is exactly CHUNK_SIZE characters (except the last one of a page)
and consecutive chunks share exactly CHUNK_OVERLAP characters, so the number
of chunks depends only on the text length. No sentence or paragraph
boundaries are considered.

    size=1000, overlap=200 → windows start at 0, 800, 1600, ...
===================================================================================
"""

import logging
import math
import os
from typing import List, Optional

from langchain_core.documents import Document
from langchain_text_splitters import CharacterTextSplitter, TextSplitter
from pypdf import PdfReader

from pdfchat import config

logger = logging.getLogger(__name__)


def get_splitter(chunk_size: Optional[int] = None, chunk_overlap: Optional[int] = None) -> CharacterTextSplitter:
    """
    📖 Plain Sliding Window
    -----------------------
    separator="" makes CharacterTextSplitter work character by character, so
    windows are cut at fixed offsets; strip_whitespace=False keeps every
    chunk exactly chunk_size long and the overlap exactly chunk_overlap.
    """
    chunk_size = config.CHUNK_SIZE if chunk_size is None else chunk_size
    chunk_overlap = config.CHUNK_OVERLAP if chunk_overlap is None else chunk_overlap
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )
    return CharacterTextSplitter(
        separator="",
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        strip_whitespace=False,
    )


def expected_chunk_count(length: int, chunk_size: int, chunk_overlap: int) -> int:
    if length <= 0:
        return 0
    if length <= chunk_size:
        return 1
    return 1 + math.ceil((length - chunk_size) / (chunk_size - chunk_overlap))


def load_pages(path: str, filename: Optional[str] = None) -> List[Document]:
    """
    📖 Extract Text Page by Page
    ----------------------------
    One Document per page that has any text; blank and image-only pages are
    dropped. An empty list means nothing in the file can be indexed.

    Metadata on every page:
        source   → where the bytes were read from
        filename → original upload name (what users recognize)
        page     → 1-based page number
    """
    reader = PdfReader(path)
    filename = filename or os.path.basename(path)

    pages = []
    for idx, page in enumerate(reader.pages):
        text = page.extract_text() or ""
        if not text.strip():
            continue
        pages.append(
            Document(
                page_content=text,
                metadata={"source": path, "filename": filename, "page": idx + 1},
            )
        )

    logger.info("📄 Extracted text from %d of %d pages in %s", len(pages), len(reader.pages), filename)
    return pages


def split_pages(pages: List[Document], splitter: Optional[TextSplitter] = None) -> List[Document]:
    splitter = splitter or get_splitter()
    chunks = splitter.split_documents(pages)
    for idx, chunk in enumerate(chunks):
        chunk.metadata["chunk_index"] = idx
    logger.info("✂️ Split %d pages into %d chunks", len(pages), len(chunks))
    return chunks

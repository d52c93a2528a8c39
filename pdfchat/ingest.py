"""
===================================================================================
                INGEST.PY - The Background Job (runs inside the RQ worker)
===================================================================================

    job payload {filename, path} or {filename, url}
        ↓
    resolve the file      (read from disk / download to a temp file)
        ↓
    load_pages            (no text at all → log and stop, nothing indexed)
        ↓
    split_pages           (1000 chars, 200 overlap)
        ↓
    embed + write_chunks  (append to 'pdf-docs', or create it)
        ↓
    remove the temp file  (download variant only)

📌 FAILURE POLICY:
-----------------
process_file never raises. Errors are logged and the job ends with a
{"status": "failed"} result, so RQ does not retry it. Whatever was written
before the failure stays in Qdrant.
===================================================================================
"""

import logging
import os
from typing import Optional

from pdfchat import chunking, storage, store

logger = logging.getLogger(__name__)


def process_file(filename: str, path: Optional[str] = None, url: Optional[str] = None) -> dict:
    logger.info("📄 Processing job: filename=%s path=%s url=%s", filename, path, url)

    try:
        if url:
            local_path = storage.download_to_temp(url)
        elif path:
            local_path = path
        else:
            raise ValueError("job has neither a path nor a url")

        pages = chunking.load_pages(local_path, filename=filename)
        logger.info("✅ Loaded %d pages from PDF", len(pages))

        if not pages:
            logger.warning("⚠️ No text extracted from PDF %s", filename)
            return {"status": "skipped", "filename": filename, "reason": "no text extracted"}

        chunks = chunking.split_pages(pages)
        embeddings = store.get_embeddings()
        result = store.write_chunks(chunks, embeddings)

        if url:
            os.remove(local_path)
            logger.info("🧹 Removed temp file %s", local_path)

        return {
            "status": "indexed",
            "filename": filename,
            "pages": len(pages),
            "chunks": result.count,
            "mode": result.mode,
        }
    except Exception as e:
        logger.exception("❌ Error processing PDF %s: %s", filename, e)
        return {"status": "failed", "filename": filename, "error": str(e)}

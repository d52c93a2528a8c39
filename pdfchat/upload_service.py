"""
===================================================================================
                UPLOAD_SERVICE.PY - PDF Upload → Ingest Queue
===================================================================================

The upload request finishes as soon as the file is stored and the job is in
the queue. Indexing happens later in the worker; poll
/upload/status/{job_id} to see how it went.
===================================================================================
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from pdfchat import connection, storage

logger = logging.getLogger(__name__)

upload_router = APIRouter(prefix="/upload", tags=["Upload"])


@upload_router.post("/pdf")
def upload_pdf(pdf: Optional[UploadFile] = File(None)):
    """
    📖 PDF Upload Endpoint
    ----------------------
    HTTP POST to: http://localhost:8000/upload/pdf
    Body: multipart/form-data with the file in the "pdf" field

    Returns the job id plus where the file was stored (local path or
    remote URL, depending on STORAGE_BACKEND).
    """
    if pdf is None or not pdf.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if pdf.content_type and "pdf" not in pdf.content_type.lower():
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    try:
        document = storage.store_upload(pdf.filename, pdf.file.read())
        location = {"url": document.url} if document.url else {"path": document.path}
        job = connection.enqueue_ingest(document.filename, **location)
    except Exception as err:
        logger.error("❌ Upload of %s failed: %s", pdf.filename, err)
        raise HTTPException(status_code=500, detail="Failed to upload file")

    return {
        "message": "File uploaded successfully",
        "job_id": job.id,
        "file": {"name": document.filename, **location},
    }


@upload_router.get("/status/{job_id}")
def upload_status(job_id: str):
    try:
        status = connection.fetch_job_status(job_id)
    except Exception as err:
        raise HTTPException(status_code=500, detail=f"Failed to get job status: {err}")

    if status is None:
        raise HTTPException(
            status_code=404,
            detail=f"Job {job_id} not found. It may have expired or never existed.",
        )
    return status

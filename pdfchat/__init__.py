"""Upload PDFs, index them in Qdrant through an RQ worker, and chat over them."""

__version__ = "0.1.0"

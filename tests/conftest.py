import pytest

from pdfchat import config, store


def make_pdf(*page_texts):
    """Build a small text PDF in memory, one page per argument ("" = blank page)."""
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for pid, text in zip(page_ids, page_texts):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
        )
        content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


class FakeCollection:
    def __init__(self, docs):
        self.docs = docs

    def add_documents(self, documents):
        self.docs.extend(documents)
        return [str(i) for i in range(len(documents))]

    def similarity_search(self, query, k=4):
        return self.docs[:k]


class FakeQdrant:
    """Stands in for QdrantVectorStore's two constructors."""

    def __init__(self):
        self.collections = {}
        self.connect_kwargs = []
        self.create_kwargs = []

    def from_existing_collection(self, embedding=None, collection_name=None, **kwargs):
        self.connect_kwargs.append(dict(kwargs, collection_name=collection_name))
        if collection_name not in self.collections:
            raise ValueError(f"Collection {collection_name} not found")
        return FakeCollection(self.collections[collection_name])

    def from_documents(self, documents, embedding=None, collection_name=None, **kwargs):
        self.create_kwargs.append(dict(kwargs, collection_name=collection_name))
        self.collections[collection_name] = list(documents)
        return FakeCollection(self.collections[collection_name])


@pytest.fixture
def qdrant(monkeypatch):
    fake = FakeQdrant()
    monkeypatch.setattr(store, "QdrantVectorStore", fake)
    monkeypatch.setattr(store, "get_embeddings", lambda: object())
    monkeypatch.setattr(config, "QDRANT_API_KEY", None)
    return fake


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setattr(config, "UPLOAD_DIR", str(target))
    monkeypatch.setattr(config, "STORAGE_BACKEND", "local")
    return target


@pytest.fixture
def pdf_file(tmp_path):
    def _write(*page_texts, name="doc.pdf"):
        path = tmp_path / name
        path.write_bytes(make_pdf(*page_texts))
        return path

    return _write


@pytest.fixture
def build_pdf():
    return make_pdf

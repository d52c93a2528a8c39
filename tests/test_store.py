from langchain_core.documents import Document

from pdfchat import config, store


def _chunks(*texts):
    return [Document(page_content=t, metadata={"page": 1}) for t in texts]


def test_first_write_creates_collection(qdrant):
    result = store.write_chunks(_chunks("one", "two"), object())

    assert result == store.IndexResult(mode="create", count=2)
    assert [d.page_content for d in qdrant.collections["pdf-docs"]] == ["one", "two"]
    assert len(qdrant.connect_kwargs) == 1


def test_later_writes_append(qdrant):
    store.write_chunks(_chunks("one"), object())
    result = store.write_chunks(_chunks("two", "three"), object())

    assert result.mode == "append"
    assert [d.page_content for d in qdrant.collections["pdf-docs"]] == ["one", "two", "three"]
    assert len(qdrant.create_kwargs) == 1


def test_append_failure_falls_back_to_create(qdrant, monkeypatch):
    qdrant.collections["pdf-docs"] = []

    class Broken:
        def add_documents(self, documents):
            raise RuntimeError("boom")

    monkeypatch.setattr(store, "connect", lambda embeddings: Broken())
    result = store.write_chunks(_chunks("x"), object())

    assert result.mode == "create"


def test_connection_kwargs_include_api_key_only_when_set(monkeypatch):
    monkeypatch.setattr(config, "QDRANT_API_KEY", None)
    assert "api_key" not in store.connection_kwargs()

    monkeypatch.setattr(config, "QDRANT_API_KEY", "secret")
    kwargs = store.connection_kwargs()
    assert kwargs["api_key"] == "secret"
    assert kwargs["collection_name"] == "pdf-docs"
    assert kwargs["url"] == config.QDRANT_URL


def test_search_returns_nearest_chunks_even_for_unrelated_query(qdrant):
    store.write_chunks(_chunks("alpha", "beta", "gamma"), object())

    docs = store.search("something that appears nowhere", k=2)

    assert [d.page_content for d in docs] == ["alpha", "beta"]


def test_search_connects_on_every_call(qdrant):
    store.write_chunks(_chunks("alpha"), object())
    before = len(qdrant.connect_kwargs)

    store.search("q")
    store.search("q")

    assert len(qdrant.connect_kwargs) == before + 2


def test_collection_stats(monkeypatch):
    class Named:
        def __init__(self, name):
            self.name = name

    class Client:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        def get_collections(self):
            return type("R", (), {"collections": [Named("pdf-docs"), Named("other")]})()

        def get_collection(self, name):
            return type("I", (), {"points_count": 7})()

    monkeypatch.setattr(store, "QdrantClient", Client)
    assert store.collection_stats() == {"collection_exists": True, "collection_points": 7}

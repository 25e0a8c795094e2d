import pytest

from airspot import upstream


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.delenv("PY_BACKEND_URL", raising=False)
    monkeypatch.delenv("OPENAQ_API_KEY", raising=False)
    upstream.clear_cache()
    yield
    upstream.clear_cache()


@pytest.fixture
def client():
    from app import create_app

    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()

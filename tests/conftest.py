import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import search_features.models  # noqa: F401
from search_features.config import AutosuggestSettings, OpenSearchSettings, Settings
from search_features.db.interfaces.postgresql import Base
from search_features.dependencies import get_db_session
from search_features.features.registry import build_feature_registry
from search_features.routers import autosuggest, features, indexing, ping, status_report
from search_features.services.opensearch.client import OpenSearchClient
from search_features.services.opensearch.index_config import base_posts_mapping


class FakeIndices:
    def __init__(self, exists=False, mapping_response=None):
        self._exists = exists
        self._mapping_response = mapping_response or {}
        self.created = []
        self.deleted = []

    def exists(self, index):
        return self._exists

    def create(self, index, body):
        self.created.append((index, body))
        self._exists = True
        return {"acknowledged": True, "index": index}

    def delete(self, index):
        self.deleted.append(index)
        self._exists = False

    def get_mapping(self, index):
        return self._mapping_response

    def stats(self, index):
        return {"indices": {index: {"total": {"store": {"size_in_bytes": 2048}}}}}


class FakeCluster:
    def __init__(self, status="green", error=None):
        self.status = status
        self.error = error

    def health(self, index=None):
        if self.error is not None:
            raise Exception(self.error)
        return {"status": self.status}


class FakeOpenSearch:
    def __init__(self, exists=False, search_response=None, cluster_status="green", cluster_error=None):
        self.indices = FakeIndices(exists=exists)
        self.cluster = FakeCluster(cluster_status, cluster_error)
        self.indexed = []
        self.searches = []
        self._search_response = search_response or {"hits": {"total": {"value": 0}, "hits": []}}

    def index(self, index, id, body, refresh=False):
        self.indexed.append((index, id, body))
        return {"result": "created", "_id": id}

    def search(self, index, body):
        self.searches.append((index, body))
        return self._search_response

    def count(self, index):
        return {"count": len(self.indexed)}

    def info(self):
        return {"version": {"number": "2.11.0"}}


@pytest.fixture
def settings():
    return Settings(
        app_version="1.2.3",
        opensearch=OpenSearchSettings(host="http://search.internal:9200", index_name="wp-posts"),
        autosuggest=AutosuggestSettings(),
        default_active_features=["autosuggest"],
    )


@pytest.fixture
def base_mapping():
    return base_posts_mapping()


@pytest.fixture
def fake_opensearch():
    return FakeOpenSearch()


@pytest.fixture
def opensearch_client(settings, fake_opensearch):
    return OpenSearchClient(host=settings.opensearch.host, settings=settings, client=fake_opensearch)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def app(settings, db_session, opensearch_client):
    app = FastAPI()
    for module in (ping, features, autosuggest, indexing, status_report):
        app.include_router(module.router, prefix="/api/v1")

    app.state.settings = settings
    app.state.feature_registry = build_feature_registry()
    app.state.opensearch_client = opensearch_client
    app.state.autosuggest_option_filters = []

    def override_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_session
    return app


@pytest.fixture
def api(app):
    return TestClient(app)

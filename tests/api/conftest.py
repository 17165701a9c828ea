import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_db
from app.db.models import Base
from app.main import app


@pytest.fixture
def session_factory(tmp_path):
    # every test gets its own SQLite file
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test_storeops.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_store(client):
    def _make(code, name, supervisor_id=None, **extra):
        resp = client.post(
            "/api/v1/stores",
            json={"store_code": code, "store_name": name, "supervisor_id": supervisor_id, **extra},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def make_campaign(client):
    def _make(start, end, name="Spring Promo"):
        resp = client.post(
            "/api/v1/campaigns",
            json={"name": name, "start_date": start, "end_date": end},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make

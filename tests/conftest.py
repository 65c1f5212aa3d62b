import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool
from tenacity import wait_none

import models  # noqa: F401
from db.session import get_session
from main import app
from routers.editors import get_editor_registry
from services.editor import EditorRegistry
from services.storage import LogoStorage, get_logo_storage

# Short enough to keep the suite fast, long enough to batch a burst of edits
AUTOSAVE_DELAY = 0.2


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="editors")
def editors_fixture(engine):
    registry = EditorRegistry(
        lambda: Session(engine),
        autosave_delay=AUTOSAVE_DELAY,
        autosave_retry_wait=wait_none(),
    )
    yield registry
    registry.close_all()


@pytest.fixture(name="storage")
def storage_fixture(tmp_path):
    return LogoStorage(tmp_path / "media", "/media")


@pytest.fixture(name="client")
def client_fixture(session: Session, editors: EditorRegistry, storage: LogoStorage):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_editor_registry] = lambda: editors
    app.dependency_overrides[get_logo_storage] = lambda: storage

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

"""
pytest fixtures: an in-memory SQLite store per test, seeded users and an API client
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from herohub.core.database import Base, build_engine, get_db
from herohub.models.user import User


@pytest.fixture
def engine():
    """Fresh in-memory database with every table created"""
    import herohub.models  # noqa: F401
    
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, username, **fields):
    user = User(username=username, active=True, **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice(db):
    return _make_user(db, "alice", first_name="Alice", last_name="Liddell", email="alice@example.com")


@pytest.fixture
def bob(db):
    return _make_user(db, "bob", first_name="Bob")


@pytest.fixture
def carol(db):
    return _make_user(db, "carol")


@pytest.fixture
def make_user(db):
    """Factory for extra users"""
    def factory(username, **fields):
        return _make_user(db, username, **fields)
    return factory


@pytest.fixture
def client(db):
    """API client sharing the test session"""
    from herohub.main import app
    
    def override_get_db():
        yield db
    
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

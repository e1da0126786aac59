import base64
import os

import pytest

# Set test environment variables before the app modules read them
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["FERNET_SECRET"] = base64.urlsafe_b64encode(b"0" * 32).decode()
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    from app.models import database
    import app.models  # noqa: F401  registers all models

    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def db():
    """Plain ORM session on the test database."""
    from app.models.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Create a user directly in the DB."""
    from app.models.user import User
    from app.utils.auth_utils import hash_password

    def _make(email="alex@example.com", name="Alex", password="s3cret-pass"):
        user = User(name=name, email=email, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(make_user):
    """Bearer headers for a freshly created user; call again for a second user."""
    from app.utils.jwt_utils import create_access_token

    def _headers(email="alex@example.com"):
        user = make_user(email=email)
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers

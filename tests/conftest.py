"""Shared pytest fixtures for test suite"""
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-the-test-suite-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""
os.environ["JWT_COOKIE_CSRF_PROTECT"] = "false"

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.database import Base, SessionLocal, engine, get_db
from models import account, documents, refresh_token, stored_record  # noqa: F401
from main import app as fastapi_app
from routers.auth import current_user_id
from services.lesson_service import LessonCatalog

TEST_USER_ID = "user-1"


class FakeGenerator:
    """Scripted stand-in for the Gemini client.

    Responses are served in order; an Exception instance is raised instead of
    returned. A ``responder`` callable, when given, answers every prompt.
    """

    def __init__(self, *responses, responder: Callable[[str], str] | None = None):
        self.responses = list(responses)
        self.responder = responder
        self.prompts: list[str] = []
        self.current_model = "gemini-2.5-flash"

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.responder is not None:
            return self.responder(prompt)
        if not self.responses:
            raise AssertionError(f"Unexpected prompt: {prompt[:80]}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def switch_model(self, model: str) -> None:
        self.current_model = model


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory schema for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def app(db_session, fake_generator):
    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.state.generator = fake_generator
    fastapi_app.state.lesson_catalog = LessonCatalog()
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()
        fastapi_app.state.generator = None


@pytest.fixture
def client(app) -> TestClient:
    """Client already signed in as TEST_USER_ID"""
    app.dependency_overrides[current_user_id] = lambda: TEST_USER_ID
    return TestClient(app)


@pytest.fixture
def anonymous_client(app) -> TestClient:
    return TestClient(app)

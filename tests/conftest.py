"""Pytest configuration and fixtures."""
import os
import tempfile
import uuid

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Point the application at throwaway locations before anything reads the settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="surveydesk-test-logs-")
os.environ["ADMIN_EMAILS"] = "root@example.com"
os.environ["ENVIRONMENT"] = "development"

from surveydesk.config import get_settings
from surveydesk.database import Base, Database
import surveydesk.models  # noqa: F401

settings = get_settings()

DEFAULT_PASSWORD = "TestPassword123"


@pytest.fixture
async def test_engine(tmp_path):
    """Fresh SQLite database per test, created from the model metadata."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()
        await session.close()


@pytest.fixture
async def test_app(test_engine):
    """Create test app bound to the per-test database."""
    from surveydesk.main import create_app

    app = create_app(settings, database=Database(settings, engine=test_engine))
    yield app


@pytest.fixture
async def user_factory(db_session):
    """Factory for creating accounts with unique usernames and e-mails."""
    from surveydesk.models.base import UserRole
    from surveydesk.services import UserService

    user_service = UserService(db_session)

    async def _create_user(
        username: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.USER,
    ):
        unique_id = uuid.uuid4().hex[:8]
        return await user_service.create_user(
            username or f"user{unique_id}",
            email or f"user{unique_id}@example.com",
            password,
            role=role,
        )

    return _create_user


@pytest.fixture
async def admin_user(user_factory):
    from surveydesk.models.base import UserRole

    return await user_factory(role=UserRole.ADMIN)


@pytest.fixture
async def member_user(user_factory):
    return await user_factory()


@pytest.fixture
def auth_headers(db_session):
    """Build an ``Authorization`` header carrying a session token for a user."""
    from surveydesk.services import AuthService

    def _headers(user) -> dict[str, str]:
        token, _ = AuthService(db_session).create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def sample_questions():
    """One question of every type, as an authoring payload."""
    return [
        {"id": "q1", "type": "text-input", "text": "What did you like?", "required": True},
        {
            "id": "q2",
            "type": "multiple-choice",
            "text": "Pick a colour",
            "options": ["Red", "Green", "Blue"],
        },
        {"id": "q3", "type": "rating-scale", "text": "Rate us", "min": 1, "max": 5, "required": True},
        {"id": "q4", "type": "dropdown", "text": "Department", "options": ["Sales", "Support"]},
        {"id": "q5", "type": "slider", "text": "Confidence", "min": 0, "max": 100},
    ]


@pytest.fixture
def survey_factory(db_session, admin_user, sample_questions):
    """Factory for surveys authored by ``admin_user``."""
    from surveydesk.models.base import SurveyStatus
    from surveydesk.schemas.question import Question
    from surveydesk.services import SurveyService

    async def _create_survey(
        title: str | None = None,
        status: SurveyStatus = SurveyStatus.ACTIVE,
        questions: list[dict] | None = None,
    ):
        return await SurveyService(db_session).create_survey(
            admin_user.user_id,
            title or f"Survey {uuid.uuid4().hex[:6]}",
            [Question(**q) for q in (questions if questions is not None else sample_questions)],
            status=status,
        )

    return _create_survey


@pytest.fixture
def group_factory(db_session):
    from surveydesk.services import GroupService

    async def _create_group(name: str | None = None, description: str | None = None):
        return await GroupService(db_session).create_group(
            name or f"Group {uuid.uuid4().hex[:6]}", description
        )

    return _create_group

"""Shared pytest fixtures."""

import asyncio
from unittest.mock import MagicMock

import pytest
import yaml
from litestar.testing import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import wikirev.db.models  # noqa: F401 - register all models on Base
from wikirev.auth.tokens import create_user_token
from wikirev.config import DatabaseConfig, Settings
from wikirev.db.base import Base
from wikirev.db.models import Character, Person, RevisionHistory, RevisionText, RevType, Subject, User
from wikirev.lib import rev_text

SECRET = "test-secret-key"


@pytest.fixture
def temp_app_yaml(tmp_path):
    """Create a temporary app.yaml file for testing."""
    config_path = tmp_path / "app.yaml"

    def _create_config(config: dict):
        with open(config_path, "w") as f:
            yaml.safe_dump(config, f)
        return config_path

    return _create_config


@pytest.fixture
def fake_request():
    """Minimal mock request for exception handlers."""
    request = MagicMock()
    request.method = "GET"
    request.url.path = "/test"
    return request


# ---------------------------------------------------------------------------
# Database (aiosqlite file per test)
# ---------------------------------------------------------------------------

@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'wiki.db'}"


@pytest.fixture
async def engine(db_url):
    engine = create_async_engine(db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


def add_revision(session, *, rev_id, rev_type, target_id, creator_id, content, created_at=1_700_000_000, message="edit"):
    """Stage a revision row and its blob, mirroring what record_revision writes."""
    session.add(RevisionText(id=rev_id, blob=rev_text.serialize({rev_id: content})))
    session.add(
        RevisionHistory(
            id=rev_id,
            type=int(rev_type),
            target_id=target_id,
            creator_id=creator_id,
            text_id=rev_id,
            created_at=created_at,
            commit_message=message,
        )
    )


async def seed_wiki(session: AsyncSession) -> None:
    """Users, subjects, persons, characters and a few revisions of each kind."""
    session.add_all([
        User(id=1, username="alice", nickname="Alice"),
        User(id=2, username="bob", nickname="Bob"),
        Subject(id=10, name="Cowboy Bebop", name_cn="星际牛仔", type_id=2),
        Subject(id=11, name="Trigun", type_id=2),
        Person(id=1, name="Koichi Yamadera", infobox="{{Infobox}}", summary="Voice actor", type_id=1),
        Person(id=2, name="Locked Person", locked=True),
        Person(id=3, name="Merged Person", redirect=1),
        Character(id=1, name="Spike Spiegel", infobox="{{Infobox Crt}}", summary="Bounty hunter", role=1),
        Character(id=2, name="Locked Character", locked=True),
    ])

    # Person 1 edit history; creator 99 has no user row
    add_revision(session, rev_id=1, rev_type=RevType.PERSON_EDIT, target_id=1, creator_id=1,
                 content={"crt_name": "Koichi", "crt_infobox": "", "crt_summary": "", "extra": {"img": ""}},
                 message="create")
    add_revision(session, rev_id=2, rev_type=RevType.PERSON_EDIT, target_id=1, creator_id=99,
                 content={"crt_name": "Koichi Yamadera", "crt_infobox": "{{Infobox}}",
                          "crt_summary": "Voice actor", "extra": {"img": "a.jpg"}},
                 message="fix name")
    add_revision(session, rev_id=3, rev_type=RevType.PERSON_SUBJECT_RELATION, target_id=1, creator_id=2,
                 content={"0": {"subject_id": 10, "position": 3}, "1": {"subject_id": 404, "position": 1}})
    add_revision(session, rev_id=4, rev_type=RevType.PERSON_CAST_RELATION, target_id=1, creator_id=2,
                 content=[{"subject_id": 10, "crt_id": 1}])

    # Character 1
    add_revision(session, rev_id=5, rev_type=RevType.CHARACTER_EDIT, target_id=1, creator_id=1,
                 content={"crt_name": "Spike", "crt_infobox": "{{Infobox Crt}}", "crt_summary": "",
                          "extra": {"img": ""}})
    add_revision(session, rev_id=6, rev_type=RevType.CHARACTER_SUBJECT_RELATION, target_id=1, creator_id=1,
                 content={"0": {"subject_id": 10, "crt_type": 1}})
    add_revision(session, rev_id=7, rev_type=RevType.CHARACTER_CAST_RELATION, target_id=1, creator_id=1,
                 content={"0": {"subject_id": 10, "prsn_id": 1}, "1": {"subject_id": 11, "prsn_id": 500}})

    # Subject 10
    add_revision(session, rev_id=8, rev_type=RevType.SUBJECT_RELATION, target_id=10, creator_id=1, content={})
    add_revision(session, rev_id=9, rev_type=RevType.SUBJECT_CHARACTER_RELATION, target_id=10, creator_id=1,
                 content={})
    add_revision(session, rev_id=10, rev_type=RevType.SUBJECT_CAST_RELATION, target_id=10, creator_id=2,
                 content={})
    add_revision(session, rev_id=11, rev_type=RevType.SUBJECT_PERSON_RELATION, target_id=10, creator_id=2,
                 content={})

    # Revision whose blob is gone
    session.add(RevisionHistory(id=12, type=int(RevType.PERSON_EDIT), target_id=3, creator_id=1, text_id=999))

    await session.commit()


@pytest.fixture
async def seeded_session(db_session):
    await seed_wiki(db_session)
    return db_session


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(db_url):
    return Settings(secret_key=SECRET, db=DatabaseConfig(url=db_url))


@pytest.fixture
def client(db_url, settings):
    """TestClient over a freshly seeded database."""
    from wikirev.app_factory import create_app

    async def _setup():
        engine = create_async_engine(db_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with async_sessionmaker(engine, expire_on_commit=False)() as session:
            await seed_wiki(session)
        await engine.dispose()

    asyncio.run(_setup())

    with TestClient(app=create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def read_db(db_url):
    """Run an async query against the test database from sync tests."""

    def _run(fn):
        async def _inner():
            engine = create_async_engine(db_url)
            try:
                async with async_sessionmaker(engine, expire_on_commit=False)() as session:
                    return await fn(session)
            finally:
                await engine.dispose()

        return asyncio.run(_inner())

    return _run


@pytest.fixture
def make_headers():
    """Build an Authorization header for a user signed with the test secret."""

    def _make(user_id, permissions=(), expires_in=3600):
        token = create_user_token(user_id, list(permissions), SECRET, expires_in)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def editor_headers(make_headers):
    return make_headers(1, ["mono_edit"])


@pytest.fixture
def viewer_headers(make_headers):
    return make_headers(2)

import os
import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Ensure project root on sys.path so 'rollup_reports' resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from rollup_reports.main import app  # type: ignore
from rollup_reports.database import Base  # type: ignore
from rollup_reports.api import deps  # type: ignore
"""Pytest fixtures and factories.

SQLAlchemy relationship configuration requires all model modules to be imported
before Base.metadata.create_all(), otherwise back_populates targets might not exist yet.
"""
from rollup_reports.models.db import (
    Campaign, CampaignUpload, CampaignContentRaw, ContentNetworkAlias, GenreMap, ContentAlias,
)
from rollup_reports.models.domain import RawContentRow

# File-based SQLite so the TestClient's threadpool and the test thread see the same data.
SQLALCHEMY_TEST_URL = "sqlite+pysqlite:///./test_rollups.db"
engine = create_engine(
    SQLALCHEMY_TEST_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# /health/detailed opens its own session from rollup_reports.main
import rollup_reports.main as _main_mod  # noqa: E402
_main_mod.SessionLocal = TestingSessionLocal  # type: ignore

@pytest.fixture(scope="session", autouse=True)
def create_test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    try:
        os.remove("test_rollups.db")
    except OSError:
        pass

def _truncate_all():
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())

@pytest.fixture(autouse=True)
def _clean_tables(create_test_db):  # type: ignore[unused-argument]
    """Every test starts from empty tables (also after an aborted previous run)."""
    _truncate_all()
    yield
    _truncate_all()

@pytest.fixture()
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

# Override dependency
def _override_get_db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

app.dependency_overrides[deps.get_db] = _override_get_db

@pytest.fixture()
def client():
    return TestClient(app)

# ---------- Data factory helpers ----------

@pytest.fixture()
def campaign_factory(db_session):
    def _create(campaign_id: str, rows: list[tuple[str, str, int, int]], *, name: str | None = None):
        """rows: (content_title, content_network_name, impression, quartile100)"""
        campaign = Campaign(campaign_id=campaign_id, campaign_name=name or campaign_id)
        db_session.add(campaign)
        db_session.add(CampaignUpload(
            upload_id=f"upload-{campaign_id}",
            campaign_id=campaign_id,
            file_name=f"{campaign_id}.csv",
            stored_path=f"virtual://{campaign_id}/{campaign_id}.csv",
        ))
        for title, network, impression, completes in rows:
            db_session.add(CampaignContentRaw(
                campaign_id=campaign_id,
                campaign_name_src=campaign.campaign_name,
                content_title=title,
                content_network_name=network,
                impression=impression,
                quartile100=completes,
            ))
        db_session.commit()
        db_session.refresh(campaign)
        return campaign
    return _create

@pytest.fixture()
def network_alias_factory(db_session):
    def _create(alias: str, network_names: list[str]):
        entry = ContentNetworkAlias(alias=alias, network_names=network_names)
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry
    return _create

@pytest.fixture()
def genre_factory(db_session):
    def _create(raw_genre: str, genre_canon: str):
        entry = GenreMap(raw_genre=raw_genre, genre_canon=genre_canon)
        db_session.add(entry)
        db_session.commit()
        return entry
    return _create

@pytest.fixture()
def content_alias_factory(db_session):
    def _create(content_title_canon: str, content_key: str):
        entry = ContentAlias(content_title_canon=content_title_canon, content_key=content_key)
        db_session.add(entry)
        db_session.commit()
        return entry
    return _create

@pytest.fixture()
def raw_row():
    """Build a RawContentRow with short positional arguments."""
    def _make(network: str, impression: int, completes: int = 0, *, title: str = "Show", campaign_id: str = "c1"):
        return RawContentRow(
            campaign_id=campaign_id,
            content_title=title,
            content_network_name=network,
            impression=impression,
            quartile100=completes,
        )
    return _make

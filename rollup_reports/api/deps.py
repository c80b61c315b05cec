"""
Dependencies for database sessions, the rollup store and common lookups.
"""
from typing import Generator
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from rollup_reports.database import SessionLocal
from rollup_reports.models.db import Campaign
from rollup_reports.stores import RollupStore, SqlRollupStore
from rollup_reports.utils import get_logger

logger = get_logger(__name__)

def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.
    Ensures proper session lifecycle management with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error("Database session error", error=str(e), exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()

def get_rollup_store(db: Session = Depends(get_db)) -> RollupStore:
    """Rollup store bound to the request's session. Override in tests to inject fixtures."""
    return SqlRollupStore(db)

def get_campaign_or_404(campaign_id: str, db: Session = Depends(get_db)) -> Campaign:
    """
    Load a campaign by its id.

    Raises:
        HTTPException: 404 if the campaign does not exist
    """
    campaign = db.get(Campaign, campaign_id)
    if campaign is None:
        logger.warning("Campaign not found", campaign_id=campaign_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Campaign '{campaign_id}' not found"
        )
    return campaign

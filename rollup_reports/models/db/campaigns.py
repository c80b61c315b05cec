"""SQLAlchemy models for campaigns and their uploaded delivery logs."""
from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

if TYPE_CHECKING:  # pragma: no cover
    from .content_rows import CampaignContentRaw
from sqlalchemy.sql import func
from rollup_reports.database import Base


class Campaign(Base):
    __tablename__ = "campaigns"
    campaign_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    campaign_name: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Relationships (deleting a campaign removes its uploads and raw rows)
    uploads: Mapped[list["CampaignUpload"]] = relationship(
        "CampaignUpload", back_populates="campaign", cascade="all, delete-orphan"
    )
    content_rows: Mapped[list["CampaignContentRaw"]] = relationship(
        "CampaignContentRaw", back_populates="campaign", cascade="all, delete-orphan"
    )


class CampaignUpload(Base):
    __tablename__ = "campaign_uploads"
    upload_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    campaign_id: Mapped[str] = mapped_column(String, ForeignKey("campaigns.campaign_id"), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    stored_path: Mapped[str] = mapped_column(String, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    campaign: Mapped["Campaign"] = relationship("Campaign", back_populates="uploads")

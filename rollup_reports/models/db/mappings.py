"""SQLAlchemy models for operator-maintained name mappings used by rollups."""
from __future__ import annotations
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from rollup_reports.database import Base


class ContentNetworkAlias(Base):
    """Many raw network names reported under one display alias.

    A raw name is expected in at most one row's ``network_names``; this is
    not enforced and lookups take the first match.
    """
    __tablename__ = "content_network_aliases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    alias: Mapped[str] = mapped_column(String, nullable=False, index=True)
    network_names: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class GenreMap(Base):
    __tablename__ = "genre_map"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    raw_genre: Mapped[str] = mapped_column(String, unique=True, index=True)
    genre_canon: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class ContentAlias(Base):
    __tablename__ = "content_aliases"

    content_title_canon: Mapped[str] = mapped_column(String, primary_key=True)
    content_key: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

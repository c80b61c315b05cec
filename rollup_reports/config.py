"""Core application configuration & tunable reporting rules.

Business rules that may evolve (the long-tail "Other" threshold, fallback
labels, expected CSV columns, export file names) are centralized here so they
can be adjusted without diving into service logic. Values are module constants
(mutable dicts allowed so tests can monkeypatch them); deployment-specific
settings are read from environment variables.
"""
from __future__ import annotations

import os

# Database connection string. Default is a local sqlite file.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./rollup_reports.db")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str | None = os.getenv("LOG_FILE") or None

CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# -------------------------------- Rollups --------------------------------- #
ROLLUP_SETTINGS: dict[str, int | str] = {
	# Unaliased rows below this many impressions are folded into "Other".
	# Older snapshots of the report used 1000 applied per network after
	# aggregation; see DESIGN.md.
	"other_threshold_impressions": int(os.getenv("OTHER_THRESHOLD_IMPRESSIONS", "50")),
	"other_label": "Other",
	"unknown_label": "Unknown",
	# Appended to the network name when a row has no content title.
	"unknown_content_suffix": "Unknown Content",
}

# ------------------------------- Ingestion -------------------------------- #
INGESTION_SETTINGS: dict[str, int | str | dict[str, str]] = {
	# Header names after trim + lower-case.
	"columns": {
		"campaign_name_src": "campaign name",
		"content_title": "content title",
		"content_network_name": "content network name",
		"impression": "impression",
		"quartile100": "quartile100",
	},
	"campaign_id_suffix_length": 6,
	"stored_path_scheme": "virtual",
}

# -------------------------------- Export ---------------------------------- #
EXPORT_SETTINGS: dict[str, dict[str, str]] = {
	"filenames": {
		"app": "app-rollup.csv",
		"genre": "genre-rollup.csv",
		"content": "content-rollup.csv",
	},
}

__all__ = [
	"DATABASE_URL",
	"LOG_LEVEL",
	"LOG_FILE",
	"CORS_ORIGINS",
	# Rule groups
	"ROLLUP_SETTINGS",
	"INGESTION_SETTINGS",
	"EXPORT_SETTINGS",
]

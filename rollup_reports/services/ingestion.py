"""Delivery log ingestion.

Turns uploaded CSV text into typed ``RawContentRow`` values and persists a
campaign, its upload record and its raw rows in one transaction.

Coercion happens here, once:
  * header names are trimmed and lower-cased
  * ``campaign name`` -> optional string
  * ``content title`` / ``content network name`` -> string, ``""`` when absent
  * ``impression`` / ``quartile100`` -> non-negative int, unparseable -> 0
"""
from __future__ import annotations

import csv
import io
import re
import secrets
import string
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from sqlalchemy.orm import Session

from rollup_reports.config import INGESTION_SETTINGS
from rollup_reports.models.db import Campaign, CampaignContentRaw, CampaignUpload
from rollup_reports.models.domain import RawContentRow
from rollup_reports.utils import get_logger, log_business_event, log_performance

logger = get_logger(__name__)

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")
_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class IngestResult:
    campaign_id: str
    campaign_name: str
    upload_id: str
    file_name: str
    stored_path: str
    rows_processed: int
    rows_inserted: int
    parse_errors: int


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_campaign_id(campaign_name: str) -> str:
    """``"Summer Promo 2024!"`` -> ``"summer-promo-2024-k3j9x1"``."""
    slug = _SLUG_SEPARATORS.sub("-", campaign_name.lower()).strip("-")
    suffix = _random_suffix(int(INGESTION_SETTINGS["campaign_id_suffix_length"]))  # type: ignore[arg-type]
    return f"{slug}-{suffix}" if slug else suffix


def generate_upload_id() -> str:
    return f"upload-{int(time.time() * 1000)}-{_random_suffix(6)}"


def campaign_name_from_filename(file_name: str) -> str:
    stem = PurePath(file_name).stem
    return re.sub(r"[_-]", " ", stem)


def parse_delivery_csv(csv_text: str, campaign_id: str) -> tuple[list[RawContentRow], int]:
    """Parse a delivery log into typed rows.

    Returns ``(rows, parse_errors)`` where ``parse_errors`` counts lines whose
    cell count differs from the header. Such lines are still ingested with
    whatever cells are present.
    """
    columns: dict[str, str] = INGESTION_SETTINGS["columns"]  # type: ignore[assignment]
    reader = csv.reader(io.StringIO(csv_text.lstrip("\ufeff")))
    header: Optional[list[str]] = None
    rows: list[RawContentRow] = []
    parse_errors = 0

    for cells in reader:
        if not any(c.strip() for c in cells):
            continue
        if header is None:
            header = [c.strip().lower() for c in cells]
            continue
        if len(cells) != len(header):
            parse_errors += 1
        record = dict(zip(header, cells))
        rows.append(RawContentRow.from_mapping({
            "campaign_id": campaign_id,
            "campaign_name_src": record.get(columns["campaign_name_src"]),
            "content_title": record.get(columns["content_title"]),
            "content_network_name": record.get(columns["content_network_name"]),
            "impression": record.get(columns["impression"]),
            "quartile100": record.get(columns["quartile100"]),
        }))

    if header is not None:
        missing = [c for c in columns.values() if c not in header]
        if missing:
            logger.warning("Delivery log missing expected columns", campaign_id=campaign_id, missing_columns=missing)
    return rows, parse_errors


def ingest_delivery_log(
    session: Session,
    file_name: str,
    csv_text: str,
    campaign_name: Optional[str] = None,
    request_id: Optional[str] = None,
) -> IngestResult:
    """Create a campaign from one delivery log upload.

    Raises:
        ValueError: if ``file_name`` is not a ``.csv`` file.
    """
    if not file_name.lower().endswith(".csv"):
        raise ValueError("Only CSV files are allowed")

    start = time.time()
    name = (campaign_name or "").strip() or campaign_name_from_filename(file_name)
    campaign_id = generate_campaign_id(name)
    stored_path = f"{INGESTION_SETTINGS['stored_path_scheme']}://{campaign_id}/{file_name}"

    rows, parse_errors = parse_delivery_csv(csv_text, campaign_id)
    if parse_errors:
        logger.warning("Delivery log had malformed lines", campaign_id=campaign_id, parse_errors=parse_errors)

    try:
        campaign = Campaign(campaign_id=campaign_id, campaign_name=name)
        upload = CampaignUpload(
            upload_id=generate_upload_id(),
            campaign_id=campaign_id,
            file_name=file_name,
            stored_path=stored_path,
        )
        session.add(campaign)
        session.add(upload)
        session.add_all(
            CampaignContentRaw(
                campaign_id=campaign_id,
                campaign_name_src=r.campaign_name_src,
                content_title=r.content_title,
                content_network_name=r.content_network_name,
                impression=r.impression,
                quartile100=r.quartile100,
            )
            for r in rows
        )
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Delivery log ingestion failed", campaign_id=campaign_id, file_name=file_name, exc_info=True)
        raise

    result = IngestResult(
        campaign_id=campaign_id,
        campaign_name=name,
        upload_id=upload.upload_id,
        file_name=file_name,
        stored_path=stored_path,
        rows_processed=len(rows),
        rows_inserted=len(rows),
        parse_errors=parse_errors,
    )

    log_business_event(
        event_type="campaign_ingested",
        details={
            "campaign_id": campaign_id,
            "campaign_name": name,
            "file_name": file_name,
            "rows_inserted": result.rows_inserted,
        },
        request_id=request_id,
    )
    log_performance(
        operation="ingest_delivery_log",
        duration_ms=(time.time() - start) * 1000,
        additional_data={"campaign_id": campaign_id, "rows": len(rows)},
    )
    return result


__all__ = [
    "IngestResult",
    "generate_campaign_id",
    "generate_upload_id",
    "campaign_name_from_filename",
    "parse_delivery_csv",
    "ingest_delivery_log",
]

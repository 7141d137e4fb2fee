"""Bulk property import from CSV.

Expected columns: title, description, price, location, propertyType,
bedrooms, bathrooms, area, amenities (or features), images. List columns
hold comma-separated values.

Rows without a title, a numeric price or a location are skipped, as are rows
that fail request validation (e.g. an unknown property type). Unparsable
bedrooms/bathrooms/area fall back to 0.
"""

import csv
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.invalidator import WritePathInvalidator
from src.pl_property.application.schemas import PropertyCreateRequest
from src.pl_property.domain.models import NewProperty
from src.pl_property.domain.repository import PropertyRepositoryProtocol

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    imported: int = 0
    skipped: int = 0


def _split_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _float_or_none(raw: str | None) -> float | None:
    try:
        return float(raw) if raw not in (None, "") else None
    except ValueError:
        return None


def _int_or_zero(raw: str | None) -> int:
    # "2.0" and " 3 " count as 2 and 3; fractions truncate
    try:
        return int(float(raw)) if raw not in (None, "") else 0
    except (ValueError, OverflowError):
        return 0


def parse_row(record: dict[str, Any]) -> NewProperty | None:
    """Map one CSV record onto a validated NewProperty, or None to skip it."""
    title = (record.get("title") or "").strip()
    location = (record.get("location") or "").strip()
    price = _float_or_none(record.get("price"))
    if not title or not location or price is None:
        return None

    try:
        req = PropertyCreateRequest(
            title=title,
            description=(record.get("description") or "").strip() or title,
            price=price,
            location=location,
            property_type=(record.get("propertyType") or "").strip(),
            bedrooms=_int_or_zero(record.get("bedrooms")),
            bathrooms=_int_or_zero(record.get("bathrooms")),
            area=_float_or_none(record.get("area")) or 0,
            amenities=_split_list(record.get("amenities") or record.get("features")),
            images=_split_list(record.get("images")),
        )
    except ValidationError:
        return None
    return req.to_domain()


def read_csv(path: Path) -> tuple[list[NewProperty], int]:
    """Parse a CSV file; returns (valid rows, skipped count)."""
    rows: list[NewProperty] = []
    skipped = 0
    with path.open(newline="", encoding="utf-8") as fh:
        for line_no, record in enumerate(csv.DictReader(fh), start=2):
            parsed = parse_row(record)
            if parsed is None:
                logger.warning("Skipping invalid record at line %d: %s", line_no, record)
                skipped += 1
                continue
            rows.append(parsed)
    return rows, skipped


async def import_properties_csv(
    path: Path,
    owner_id: uuid.UUID,
    db: AsyncSession,
    repo: PropertyRepositoryProtocol,
    invalidator: WritePathInvalidator,
) -> ImportReport:
    rows, skipped = read_csv(path)
    imported = await repo.create_many(db, owner_id, rows)
    await db.commit()
    if imported:
        await invalidator.property_created()
    logger.info("Imported %d properties from %s (%d skipped)", imported, path, skipped)
    return ImportReport(imported=imported, skipped=skipped)

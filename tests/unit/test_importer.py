"""Unit tests for the CSV property importer."""

import uuid
from pathlib import Path
from unittest.mock import AsyncMock

from src.pl_property.application.importer import import_properties_csv, parse_row, read_csv

HEADER = "title,description,price,location,propertyType,bedrooms,bathrooms,area,amenities,images\n"


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "properties.csv"
    path.write_text(HEADER + body, encoding="utf-8")
    return path


class TestParseRow:
    def test_full_row(self) -> None:
        row = parse_row({
            "title": "Beach house",
            "description": "Steps from the sand",
            "price": "450000",
            "location": "Malibu, CA",
            "propertyType": "House",
            "bedrooms": "3",
            "bathrooms": "2",
            "area": "180.5",
            "amenities": "pool, garage,",
            "images": "",
        })
        assert row is not None
        assert row.price == 450000
        assert row.amenities == ["pool", "garage"]
        assert row.area == 180.5

    def test_features_column_accepted(self) -> None:
        row = parse_row({
            "title": "Flat", "price": "1", "location": "X",
            "propertyType": "Apartment", "features": "lift",
        })
        assert row is not None
        assert row.amenities == ["lift"]
        assert row.description == "Flat"

    def test_bad_numbers_default_to_zero(self) -> None:
        row = parse_row({
            "title": "Flat", "price": "1", "location": "X",
            "propertyType": "Apartment", "bedrooms": "n/a", "area": "?",
        })
        assert row is not None
        assert (row.bedrooms, row.area) == (0, 0)

    def test_decimal_and_padded_counts_parse_leniently(self) -> None:
        row = parse_row({
            "title": "Flat", "price": "1", "location": "X", "propertyType": "Apartment",
            "bedrooms": "2.0", "bathrooms": " 3 ",
        })
        assert row is not None
        assert (row.bedrooms, row.bathrooms) == (2, 3)

    def test_missing_required_fields_skip(self) -> None:
        assert parse_row({"title": "", "price": "1", "location": "X", "propertyType": "House"}) is None
        assert parse_row({"title": "A", "price": "abc", "location": "X", "propertyType": "House"}) is None

    def test_unknown_type_skips(self) -> None:
        assert parse_row({"title": "A", "price": "1", "location": "X", "propertyType": "Igloo"}) is None


def test_read_csv_counts_skipped(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        'Loft,Nice,100000,"Austin, TX",Condo,1,1,50,"gym,pool",\n'
        ",,,,,,,,,\n",
    )
    rows, skipped = read_csv(path)
    assert len(rows) == 1
    assert rows[0].location == "Austin, TX"
    assert rows[0].amenities == ["gym", "pool"]
    assert skipped == 1


async def test_import_commits_then_invalidates(tmp_path: Path) -> None:
    path = _write(tmp_path, "Loft,Nice,100000,Austin,Condo,1,1,50,,\n")
    events: list[str] = []
    db = AsyncMock()
    db.commit = AsyncMock(side_effect=lambda: events.append("commit"))
    repo = AsyncMock()
    repo.create_many = AsyncMock(return_value=1)
    invalidator = AsyncMock()
    invalidator.property_created = AsyncMock(side_effect=lambda: events.append("invalidate"))

    report = await import_properties_csv(path, uuid.uuid4(), db, repo, invalidator)

    assert (report.imported, report.skipped) == (1, 0)
    assert events == ["commit", "invalidate"]


async def test_import_nothing_skips_invalidation(tmp_path: Path) -> None:
    path = _write(tmp_path, "")
    repo = AsyncMock()
    repo.create_many = AsyncMock(return_value=0)
    invalidator = AsyncMock()

    report = await import_properties_csv(path, uuid.uuid4(), AsyncMock(), repo, invalidator)

    assert report.imported == 0
    invalidator.property_created.assert_not_awaited()

"""Unit tests for the property search query builder."""

import pytest

from src.pl_common.enums import PropertySortField, PropertyType, SortOrder
from src.pl_property.domain.query_builder import (
    PropertyFilters,
    build_predicate,
    build_property_query,
    build_sort,
)


class TestPredicate:
    def test_empty_filters_match_everything(self) -> None:
        assert build_predicate(PropertyFilters()) == {}

    def test_price_range_and_type(self) -> None:
        filters = PropertyFilters(
            min_price=100000, max_price=300000, property_type=PropertyType.APARTMENT
        )
        assert build_predicate(filters) == {
            "price": {"$gte": 100000, "$lte": 300000},
            "propertyType": "Apartment",
        }

    def test_single_bound(self) -> None:
        assert build_predicate(PropertyFilters(min_bedrooms=2)) == {"bedrooms": {"$gte": 2}}
        assert build_predicate(PropertyFilters(max_area=120.5)) == {"area": {"$lte": 120.5}}

    def test_zero_bound_is_kept(self) -> None:
        assert build_predicate(PropertyFilters(min_bathrooms=0)) == {"bathrooms": {"$gte": 0}}

    def test_search_is_trimmed(self) -> None:
        assert build_predicate(PropertyFilters(search="  sea view ")) == {
            "$text": {"$search": "sea view"}
        }

    def test_blank_search_and_location_ignored(self) -> None:
        assert build_predicate(PropertyFilters(search="   ", location="")) == {}

    def test_location_is_case_insensitive_contains(self) -> None:
        assert build_predicate(PropertyFilters(location="Miami")) == {
            "location": {"$icontains": "Miami"}
        }

    def test_field_order_is_fixed(self) -> None:
        filters = PropertyFilters(
            location="x",
            max_area=10,
            min_bathrooms=1,
            min_bedrooms=1,
            property_type=PropertyType.HOUSE,
            min_price=1,
            search="y",
        )
        assert list(build_predicate(filters)) == [
            "$text", "price", "propertyType", "bedrooms", "bathrooms", "area", "location",
        ]


class TestSort:
    def test_default_is_created_at_descending(self) -> None:
        assert build_sort(PropertyFilters()) == {"createdAt": -1}

    def test_ascending_price(self) -> None:
        filters = PropertyFilters(sort_by=PropertySortField.PRICE, sort_order=SortOrder.ASC)
        assert build_sort(filters) == {"price": 1}


class TestQuery:
    def test_listing_example(self) -> None:
        query = build_property_query(
            PropertyFilters(
                min_price=100000,
                max_price=300000,
                property_type=PropertyType.APARTMENT,
                page=1,
                limit=10,
            )
        )
        assert query.skip == 0
        assert query.sort == {"createdAt": -1}
        assert query.cache_key == (
            'properties:{"price":{"$gte":100000,"$lte":300000},'
            '"propertyType":"Apartment"}:{"createdAt":-1}:1:10'
        )

    def test_equal_filters_give_equal_keys(self) -> None:
        a = build_property_query(PropertyFilters(min_price=100000.0, page=2, limit=20))
        b = build_property_query(PropertyFilters(min_price=100000, page=2, limit=20))
        assert a.cache_key == b.cache_key
        assert a.skip == 20

    def test_different_pages_give_different_keys(self) -> None:
        a = build_property_query(PropertyFilters(page=1))
        b = build_property_query(PropertyFilters(page=2))
        assert a.cache_key != b.cache_key

    def test_different_locations_give_different_keys(self) -> None:
        a = build_property_query(PropertyFilters(location="Miami"))
        b = build_property_query(PropertyFilters(location="Boston"))
        assert a.cache_key != b.cache_key

    def test_defaults(self) -> None:
        query = build_property_query(PropertyFilters())
        assert query.cache_key == "properties:{}:{\"createdAt\":-1}:1:10"

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0)])
    def test_rejects_non_positive_paging(self, page: int, limit: int) -> None:
        with pytest.raises(ValueError):
            build_property_query(PropertyFilters(page=page, limit=limit))

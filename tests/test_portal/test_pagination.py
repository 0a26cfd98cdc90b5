"""Tests for query serialization, page links and meta.total normalization."""

import pytest

from portal.models import Meta, PageTotals, PropertiesResponse, SearchParams
from portal.pagination import (
    current_page_count,
    page_from_url,
    page_links,
    to_query,
    total_count,
)
from tests.factories import sample_page


@pytest.mark.unit
def test_to_query_drops_none_and_empty_strings():
    criteria = {"q": "", "city": "Monterrey", "status": None, "bedrooms": 0, "page": 1}

    assert to_query(criteria) == [("city", "Monterrey"), ("bedrooms", "0"), ("page", "1")]


@pytest.mark.unit
def test_to_query_string_forms():
    criteria = {"min_price": 1500000.0, "radius": 2.5, "furnished": True, "sort_direction": "desc"}

    assert to_query(criteria) == [
        ("min_price", "1500000"),
        ("radius", "2.5"),
        ("furnished", "true"),
        ("sort_direction", "desc"),
    ]


@pytest.mark.unit
def test_to_query_from_search_params_keeps_field_order():
    params = SearchParams(page=2, city="Mérida", q="alberca", max_price=3000000)

    assert to_query(params) == [
        ("q", "alberca"),
        ("city", "Mérida"),
        ("max_price", "3000000"),
        ("page", "2"),
    ]


@pytest.mark.unit
def test_to_query_empty_criteria():
    assert to_query({}) == []
    assert to_query(SearchParams()) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, page_count, total",
    [
        ([8, 42], 8, 42),
        (42, 42, 42),
        ([8], 8, 8),
        ([8, 0], 8, 8),
        ([0, 0], 0, 0),
        (None, 0, 0),
    ],
)
def test_meta_total_normalized_on_ingestion(raw, page_count, total):
    meta = Meta.model_validate({"total": raw, "current_page": 1, "last_page": 1})

    assert meta.total == PageTotals(page_count=page_count, total_count=total)
    assert current_page_count(meta) == page_count
    assert total_count(meta) == total


@pytest.mark.unit
def test_counts_without_meta():
    assert current_page_count(None) == 0
    assert total_count(None) == 0


@pytest.mark.unit
def test_response_parses_reserved_keys():
    result = PropertiesResponse.model_validate(sample_page(page=2))

    assert result.meta.from_ == 3
    assert result.links.self_.endswith("page=2")
    assert len(result.data) == 2


@pytest.mark.unit
@pytest.mark.parametrize(
    "url, page",
    [
        ("http://backend.test/api/properties?page=3", 3),
        ("http://backend.test/api/properties?city=Puebla&page=2&per_page=15", 2),
        ("http://backend.test/api/properties?city=Puebla", None),
        ("http://backend.test/api/properties?page=abc", None),
        ("http://backend.test/api/properties?page=", None),
        ("/api/properties?page=4", 4),
        ("http://backend.test:port/api/properties?page=2", None),
        (None, None),
        ("", None),
    ],
)
def test_page_from_url(url, page):
    assert page_from_url(url) == page


@pytest.mark.unit
def test_page_links_skip_arrows():
    meta = PropertiesResponse.model_validate(sample_page(page=2, last_page=4)).meta

    links = page_links(meta)

    assert [link.page for link in links] == [1, 2, 3, 4]
    assert [link.active for link in links] == [False, True, False, False]
    assert page_links(None) == []

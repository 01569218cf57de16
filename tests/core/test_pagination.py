"""Pagination Policy: tests for offset/limit normalization.

Tests cover:
    - Non-positive pages collapse to the first page
    - Default and maximum page sizes
    - Offset arithmetic for later pages
"""

import pytest

from cms_core.core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, resolve


def test_second_page_of_ten():
    assert resolve(2, 10) == (10, 10)


def test_zero_page_and_zero_size_use_defaults():
    assert resolve(0, 0) == (0, 50)


@pytest.mark.parametrize("page", [0, -1, -5, -1000])
def test_non_positive_page_yields_offset_zero(page):
    offset, _ = resolve(page, 20)
    assert offset == 0


@pytest.mark.parametrize("page_size", [501, 999, 10_000])
def test_page_size_above_max_is_clamped(page_size):
    _, limit = resolve(1, page_size)
    assert limit == MAX_PAGE_SIZE == 500


@pytest.mark.parametrize("page_size", [0, -1, -50])
def test_non_positive_page_size_defaults(page_size):
    _, limit = resolve(1, page_size)
    assert limit == DEFAULT_PAGE_SIZE == 50


def test_max_page_size_is_allowed_as_is():
    assert resolve(1, 500) == (0, 500)


def test_offset_uses_clamped_limit():
    assert resolve(3, 999) == (1000, 500)


def test_offset_uses_default_limit():
    assert resolve(4, 0) == (150, 50)

"""Tests for PageRequest and Page metadata."""

import pytest

from app.repositories.pagination import Page, PageRequest


class TestPageRequest:

    def test_offset(self):
        assert PageRequest(page=3, size=10).offset == 30

    @pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, -5)])
    def test_rejects_bad_values(self, page, size):
        with pytest.raises(ValueError):
            PageRequest(page=page, size=size)

    def test_to_dict(self):
        assert PageRequest(page=2, size=5).to_dict() == {
            "page_number": 2,
            "page_size": 5,
            "offset": 10,
        }


class TestPage:

    def test_middle_page(self):
        page = Page(content=["c", "d"], page_request=PageRequest(1, 2), total_elements=5)

        assert page.total_pages == 3
        assert page.number == 1
        assert page.size == 2
        assert page.number_of_elements == 2
        assert not page.is_first
        assert not page.is_last
        assert not page.is_empty
        assert list(page) == ["c", "d"]

    def test_no_elements(self):
        page = Page(content=[], page_request=PageRequest(0, 10), total_elements=0)

        assert page.total_pages == 0
        assert page.is_first
        assert page.is_last
        assert page.is_empty
        assert len(page) == 0

# tests/core_test/test_search_service.py

import pytest

from explorer_core.services.search_service import SearchService


@pytest.fixture
def service():
    return SearchService()


def _ids(nodes):
    return [n.id for n in nodes]


class TestSearch:

    def test_label_match_is_case_insensitive(self, service, store):
        assert _ids(service.search(store, "kras")) == ["n2"]
        assert _ids(service.search(store, "KRAS")) == ["n2"]

    def test_type_match(self, service, store):
        assert _ids(service.search(store, "protein")) == ["n2", "n3", "n4", "n5", "n6"]

    def test_id_match(self, service, store):
        assert _ids(service.search(store, "n7")) == ["n7"]

    def test_partial_label(self, service, store):
        # Descriptions are not searched ("MAPK/ERK" appears in several)
        assert _ids(service.search(store, "erk")) == ["n6"]

    @pytest.mark.parametrize("query", ["", "   ", "\t", None])
    def test_blank_query_returns_nothing(self, service, store, query):
        assert service.search(store, query) == []

    def test_no_match(self, service, store):
        assert service.search(store, "insulin") == []

    def test_query_matched_as_typed(self, service, store):
        # Surrounding whitespace is not stripped before matching
        assert service.search(store, " raf1 ") == []
        assert _ids(service.search(store, "raf1")) == ["n3"]

    def test_results_follow_store_order(self, service, store):
        # n2 matches through its label "KRAS G12C"
        assert _ids(service.search(store, "1")) == ["n1", "n2", "n3", "n5", "n6"]

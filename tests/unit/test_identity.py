"""
Tests for draft id normalization
"""

from uvdrafts.drafts.identity import draft_id, normalize_id, normalize_id_set, ordered_ids


class TestNormalizeId:
    def test_none_is_no_id(self):
        assert normalize_id(None) == ""

    def test_strings_pass_through(self):
        assert normalize_id("d_123") == "d_123"
        assert normalize_id("") == ""

    def test_numbers_match_their_json_text(self):
        """Numeric ids compare equal to the same id sent as a string"""
        assert normalize_id(123) == "123"
        assert normalize_id(12.0) == "12"
        assert normalize_id(1.5) == "1.5"
        assert normalize_id(0) == "0"

    def test_booleans_stringify_lowercase(self):
        assert normalize_id(True) == "true"
        assert normalize_id(False) == "false"


class TestDraftId:
    def test_reads_id_from_mapping(self):
        assert draft_id({"id": 7}) == "7"

    def test_non_mapping_has_no_id(self):
        assert draft_id(None) == ""
        assert draft_id("d1") == ""
        assert draft_id(["d1"]) == ""

    def test_missing_id(self):
        assert draft_id({"title": "x"}) == ""


class TestIdCollections:
    def test_ordered_ids_dedupes_and_drops_empty(self):
        assert ordered_ids(["b", "a", "", None, "b", 3]) == ["b", "a", "3"]

    def test_ordered_ids_rejects_strings_and_scalars(self):
        """A bare string is one id-like value, not a collection of characters"""
        assert ordered_ids("abc") == []
        assert ordered_ids(42) == []
        assert ordered_ids(None) == []

    def test_normalize_id_set_from_set_and_list(self):
        assert normalize_id_set({"a", 1}) == frozenset({"a", "1"})
        assert normalize_id_set(["a", "a", None]) == frozenset({"a"})
        assert normalize_id_set(object()) == frozenset()

"""
Tests for draft list reconciliation (merge, append, remove)
"""

import copy

from uvdrafts.drafts.reconcile import (
    append_unique_drafts,
    merge_draft_list_by_id,
    remove_draft_by_id,
)


def ids(drafts):
    return [d["id"] for d in drafts]


class TestMergeDraftListById:
    def test_keeps_primary_order_and_removes_duplicates(self):
        primary = [{"id": "p1"}, {"id": "p2"}, {"id": "p1"}]
        secondary = [{"id": "p2"}, {"id": "p3"}]

        assert ids(merge_draft_list_by_id(primary, secondary)) == ["p1", "p2", "p3"]

    def test_first_occurrence_wins(self):
        """Fresh server copy (primary) replaces the cached copy of the same draft"""
        fetched = [{"id": "a", "title": "fresh"}]
        cached = [{"id": "a", "title": "stale"}, {"id": "b"}]

        merged = merge_draft_list_by_id(fetched, cached)

        assert merged[0]["title"] == "fresh"
        assert ids(merged) == ["a", "b"]

    def test_fetched_then_cached_scenario(self):
        cached = [{"id": "a"}, {"id": "b"}]
        fetched = [{"id": "c"}, {"id": "a"}]

        assert ids(merge_draft_list_by_id(fetched, cached)) == ["c", "a", "b"]

    def test_merge_with_itself_is_identity(self):
        drafts = [{"id": "x"}, {"id": "y"}, {"id": "z"}]
        assert ids(merge_draft_list_by_id(drafts, drafts)) == ["x", "y", "z"]

    def test_primary_ids_come_before_secondary_only_ids(self):
        primary = [{"id": "b"}, {"id": "d"}]
        secondary = [{"id": "a"}, {"id": "b"}, {"id": "c"}]

        assert ids(merge_draft_list_by_id(primary, secondary)) == ["b", "d", "a", "c"]

    def test_drops_drafts_without_id(self):
        merged = merge_draft_list_by_id([{"id": ""}, {"title": "x"}, None, {"id": "a"}], [])
        assert ids(merged) == ["a"]

    def test_numeric_and_string_ids_are_the_same_draft(self):
        merged = merge_draft_list_by_id([{"id": 1}], [{"id": "1"}, {"id": 2}])
        assert ids(merged) == [1, 2]

    def test_non_list_inputs_are_empty(self):
        assert merge_draft_list_by_id(None, "nope") == []
        assert ids(merge_draft_list_by_id(None, [{"id": "a"}])) == ["a"]

    def test_inputs_not_mutated(self):
        primary = [{"id": "a"}, {"id": "a"}]
        secondary = [{"id": "b"}]
        before = copy.deepcopy((primary, secondary))

        merge_draft_list_by_id(primary, secondary)

        assert (primary, secondary) == before


class TestAppendUniqueDrafts:
    def test_appends_only_new_drafts(self):
        existing = [{"id": "a"}, {"id": "b"}]
        incoming = [{"id": "b"}, {"id": "c"}, {"id": "d"}, {"id": "c"}]

        assert ids(append_unique_drafts(existing, incoming)) == ["a", "b", "c", "d"]

    def test_length_is_existing_plus_unique_new_ids(self):
        existing = [{"id": "a"}]
        incoming = [{"id": "a"}, {"id": "b"}, {"id": "b"}, {"id": "c"}, {"id": None}]

        assert len(append_unique_drafts(existing, incoming)) == 1 + 2

    def test_returns_a_copy(self):
        existing = [{"id": "a"}]
        result = append_unique_drafts(existing, [{"id": "b"}])

        assert result is not existing
        assert ids(existing) == ["a"]

    def test_existing_items_kept_verbatim(self):
        """Existing entries are never de-duplicated or dropped, only appended to"""
        existing = [{"id": "a"}, {"title": "no id"}]
        result = append_unique_drafts(existing, [{"id": "a"}])

        assert result == existing

    def test_non_list_inputs(self):
        assert append_unique_drafts(None, None) == []
        assert ids(append_unique_drafts(None, [{"id": "a"}])) == ["a"]


class TestRemoveDraftById:
    def test_removes_matching_draft(self):
        drafts = [{"id": "a"}, {"id": "b"}, {"id": "c"}]
        assert ids(remove_draft_by_id(drafts, "b")) == ["a", "c"]

    def test_removes_every_copy_and_matches_normalized_ids(self):
        drafts = [{"id": 5}, {"id": "5"}, {"id": "6"}]
        assert ids(remove_draft_by_id(drafts, 5)) == ["6"]

    def test_empty_id_returns_copy(self):
        drafts = [{"id": "a"}]
        result = remove_draft_by_id(drafts, None)

        assert result == drafts
        assert result is not drafts

    def test_non_list_input(self):
        assert remove_draft_by_id(None, "a") == []
        assert remove_draft_by_id("abc", "") == []

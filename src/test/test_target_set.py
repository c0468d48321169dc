"""
Tests de TargetSet, ScanHistory y SerialNormalizer.
"""

from src.domain.Models.scan_history import ScanHistory
from src.domain.Models.target_set import TargetSet


class TestSerialNormalizer:

    def test_trims_and_lowercases(self, normalizer):
        assert normalizer.normalize("  AbC-12\n") == "abc-12"

    def test_keeps_inner_characters(self, normalizer):
        assert normalizer.normalize("A B/C") == "a b/c"

    def test_empty(self, normalizer):
        assert normalizer.normalize("") == ""
        assert normalizer.normalize("   ") == ""


class TestTargetSet:

    def test_keeps_insertion_order(self, target_set):
        target_set.add("SN3")
        target_set.add("SN1")
        target_set.add("SN2")
        assert target_set.snapshot() == ("SN3", "SN1", "SN2")

    def test_add_many_from_comma_separated_text(self, target_set):
        added = target_set.add_many(" SN001, sn002 ,, ,SN003")
        assert added == ["SN001", "sn002", "SN003"]
        assert len(target_set) == 3

    def test_duplicates_by_normalized_form_are_ignored(self, target_set):
        assert target_set.add("SN001")
        assert not target_set.add(" sn001 ")
        assert target_set.snapshot() == ("SN001",)

    def test_remove_by_normalized_form(self, target_set):
        target_set.add_many(["SN001", "SN002"])
        assert target_set.remove("sn001")
        assert not target_set.remove("sn001")
        assert target_set.snapshot() == ("SN002",)

    def test_clear(self, target_set):
        target_set.add_many("a,b,c")
        target_set.clear()
        assert len(target_set) == 0

    def test_contains(self, target_set):
        target_set.add("SN001")
        assert " SN001 " in target_set
        assert "SN0011" not in target_set
        assert 1 not in target_set

    def test_initial_serials(self, normalizer):
        ts = TargetSet(normalizer, "A1, B2")
        assert list(ts) == ["A1", "B2"]

    def test_snapshot_is_not_affected_by_later_changes(self, target_set):
        target_set.add("A")
        snap = target_set.snapshot()
        target_set.add("B")
        assert snap == ("A",)


class TestScanHistory:

    def test_record_appends_once(self):
        history = ScanHistory()
        assert history.record("ABC")
        assert not history.record("ABC")
        assert history.items() == ["ABC"]

    def test_duplicate_check_is_exact_raw_equality(self):
        history = ScanHistory()
        history.record("ABC")
        assert history.record("abc")
        assert history.record(" ABC")
        assert len(history) == 3

    def test_clear(self):
        history = ScanHistory()
        history.record("x")
        history.clear()
        assert history.items() == []

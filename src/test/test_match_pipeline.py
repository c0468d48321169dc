"""
Tests del pipeline de coincidencias: cooldown, normalización y membresía.
"""

import pytest

from src.domain.Models.decode_event import DecodeEvent
from src.domain.Models.pipeline_result import PipelineStatus
from src.domain.Services.match_pipeline import CooldownGate, MatchPipeline


def ev(payload, t, bounds=(1, 2, 3, 4)):
    return DecodeEvent(payload=payload, bounds=bounds, timestamp=t)


class TestCooldown:

    def test_events_spaced_by_cooldown_are_all_processed(self, pipeline):
        results = [pipeline.ingest(ev(f"code-{i}", i * 0.5)) for i in range(10)]
        assert all(r.status is PipelineStatus.PROCESSED for r in results)

    @pytest.mark.parametrize("gap", [0.0, 0.1, 0.25, 0.499])
    def test_event_inside_cooldown_is_suppressed(self, pipeline, gap):
        first = pipeline.ingest(ev("A", 10.0))
        second = pipeline.ingest(ev("B", 10.0 + gap))
        assert not first.is_suppressed
        assert second.is_suppressed
        assert second.observed is None
        assert second.matched is None

    def test_suppressed_event_does_not_extend_window(self, pipeline):
        pipeline.ingest(ev("A", 0.0))
        assert pipeline.ingest(ev("A", 0.4)).is_suppressed
        # la ventana se cuenta desde el último ACEPTADO (0.0), no desde 0.4
        assert not pipeline.ingest(ev("A", 0.5)).is_suppressed

    def test_first_event_is_always_accepted(self, pipeline):
        assert not pipeline.ingest(ev("A", 0.0)).is_suppressed

    def test_missing_timestamp_uses_pipeline_clock(self, target_set, normalizer):
        ticks = iter([100.0, 100.1, 101.0])
        p = MatchPipeline(target_set, normalizer, cooldown_period=0.5, clock=lambda: next(ticks))

        assert not p.ingest(DecodeEvent(payload="A")).is_suppressed
        assert p.ingest(DecodeEvent(payload="A")).is_suppressed
        assert not p.ingest(DecodeEvent(payload="A")).is_suppressed

    def test_reset_reopens_gate(self, pipeline):
        pipeline.ingest(ev("A", 0.0))
        pipeline.reset()
        assert not pipeline.ingest(ev("A", 0.1)).is_suppressed

    def test_gate_alone(self):
        gate = CooldownGate(1.0)
        assert gate.try_accept(5.0)
        assert not gate.try_accept(5.9)
        assert gate.try_accept(6.0)
        assert gate.last_accepted_at == 6.0


class TestMatching:

    def test_normalization_ignores_case_and_whitespace(self, pipeline, target_set):
        target_set.add("abc123")
        result = pipeline.ingest(ev(" ABC123 ", 0.0))
        assert result.is_match

    def test_target_entries_are_normalized_too(self, pipeline, target_set):
        target_set.add("  SN-77\n")
        assert pipeline.ingest(ev("sn-77", 0.0)).is_match

    def test_match_is_exact_after_normalization(self, pipeline, target_set):
        target_set.add("abc123")
        result = pipeline.ingest(ev("abc1234", 0.0))
        assert result.status is PipelineStatus.PROCESSED
        assert not result.is_match
        assert result.observed.payload == "abc1234"

    def test_matched_event_keeps_original_payload_and_bounds(self, pipeline, target_set):
        target_set.add("abc123")
        result = pipeline.ingest(ev("  AbC123", 3.0, bounds=(10, 20, 30, 40)))
        assert result.matched.payload == "  AbC123"
        assert result.matched.bounds == (10, 20, 30, 40)
        assert result.matched.timestamp == 3.0
        assert result.observed.payload == "  AbC123"
        assert result.observed.duplicate is False

    def test_target_set_changes_are_seen_without_reinit(self, pipeline, target_set):
        assert not pipeline.ingest(ev("xyz", 0.0)).is_match

        target_set.add("xyz")
        assert pipeline.ingest(ev("xyz", 1.0)).is_match

        target_set.remove("xyz")
        assert not pipeline.ingest(ev("xyz", 2.0)).is_match

    def test_empty_payload_is_processed(self, pipeline):
        result = pipeline.ingest(ev("", 0.0, bounds=(0, 0, 0, 0)))
        assert result.status is PipelineStatus.PROCESSED
        assert result.observed.payload == ""
        assert not result.is_match

    def test_end_to_end_scenario(self, pipeline, target_set):
        target_set.add_many(["SN001", "sn002"])

        r0 = pipeline.ingest(ev("SN001", 0.0))
        r1 = pipeline.ingest(ev("sn002", 0.2))
        r2 = pipeline.ingest(ev("SN002", 0.6))
        r3 = pipeline.ingest(ev("other", 1.2))

        assert r0.status is PipelineStatus.PROCESSED and r0.is_match
        assert r1.is_suppressed
        assert r2.status is PipelineStatus.PROCESSED and r2.is_match
        assert r2.matched.payload == "SN002"
        assert r3.status is PipelineStatus.PROCESSED and not r3.is_match

    def test_to_dict(self, pipeline, target_set):
        target_set.add("A1")
        data = pipeline.ingest(ev("A1", 0.0)).to_dict()
        assert data["status"] == "processed"
        assert data["observed"] == {"payload": "A1", "duplicate": False}
        assert data["matched"]["payload"] == "A1"

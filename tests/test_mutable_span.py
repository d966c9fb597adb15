"""Tests for the in-flight span accumulator."""

import logging
import threading
from enum import Enum

import pytest

from tracelet.tracer import (
    Endpoint,
    FixedClock,
    Kind,
    MutableSpan,
    SpanRecordBuilder,
)


def export(span: MutableSpan, builder=None):
    builder = builder or SpanRecordBuilder()
    span.write_to(builder)
    return builder.build()


@pytest.fixture
def clock():
    return FixedClock(1000)


@pytest.fixture
def span(clock):
    return MutableSpan(clock)


class TestTiming:
    """Start, finish and duration."""

    def test_start_reads_clock(self, span, clock):
        span.start()
        assert span.timestamp == 1000

    def test_explicit_start_wins_over_clock(self, span):
        span.start(42)
        assert span.timestamp == 42

    def test_last_start_wins(self, span):
        span.start(10)
        span.start(20)
        assert span.timestamp == 20

    @pytest.mark.parametrize(
        "start,finish,expected",
        [
            (1000, 2000, 1000),
            (1000, 1000, 1),
            (2000, 1000, 1),
            (0, 2000, 0),
            (1000, 0, 0),
        ],
    )
    def test_duration(self, span, start, finish, expected):
        span.start(start)
        span.finish(finish)
        assert span.duration == expected

    def test_second_finish_wins(self, span):
        span.start(1000)
        span.finish(1500)
        span.finish(3000)
        assert span.duration == 2000

    def test_unset_duration_exported_as_none(self, span):
        span.start(1000)
        record = export(span)
        assert record.timestamp == 1000
        assert record.duration is None


class TestLegacyAnnotations:
    """Core annotations from older instrumentation map to kind and timing."""

    @pytest.mark.parametrize(
        "value,kind", [("cs", Kind.CLIENT), ("sr", Kind.SERVER)]
    )
    def test_start_annotations_set_timestamp(self, span, value, kind):
        span.start(1)
        span.annotate(value, 500)
        record = export(span)
        assert record.kind is kind
        assert record.timestamp == 500
        assert span.pairs == []

    @pytest.mark.parametrize(
        "value,kind", [("cr", Kind.CLIENT), ("ss", Kind.SERVER)]
    )
    def test_finish_annotations_set_duration(self, span, value, kind):
        span.start(500)
        span.annotate(value, 800)
        record = export(span)
        assert record.kind is kind
        assert record.duration == 300
        assert span.pairs == []

    def test_client_round_trip(self, span):
        span.annotate("cs", 500)
        span.annotate("cr", 900)
        record = export(span)
        assert record.kind is Kind.CLIENT
        assert record.timestamp == 500
        assert record.duration == 400
        assert record.annotations == ()
        assert record.tags == ()

    def test_finish_annotation_without_start_leaves_duration_unset(self, span):
        span.annotate("ss", 900)
        assert span.duration == 0
        assert span.pairs == []

    def test_legacy_remap_is_logged(self, span, caplog):
        with caplog.at_level(logging.DEBUG, logger="tracelet.tracer.mutable_span"):
            span.annotate("sr", 10)
        assert any("sr" in record.getMessage() for record in caplog.records)

    def test_annotate_reads_clock(self, span, clock):
        clock.set(1234)
        span.annotate("cache.miss")
        assert export(span).annotations == ((1234, "cache.miss"),)


class TestPairs:
    """Tags and annotations share one ordered sequence."""

    def test_scenario(self, span):
        span.start(1000)
        span.tag("http.method", "GET")
        span.annotate("cache.miss", 1500)
        span.finish(2000)

        record = export(span)

        assert record.timestamp == 1000
        assert record.duration == 1000
        assert record.tags == (("http.method", "GET"),)
        assert record.annotations == ((1500, "cache.miss"),)

    def test_insertion_order_replayed(self, span):
        calls = []

        class RecordingBuilder(SpanRecordBuilder):
            def add_annotation(self, timestamp, value):
                calls.append(("annotation", timestamp, value))
                return super().add_annotation(timestamp, value)

            def put_tag(self, key, value):
                calls.append(("tag", key, value))
                return super().put_tag(key, value)

        span.tag("a", "1")
        span.annotate("first", 10)
        span.tag("b", "2")
        span.annotate("second", 20)

        export(span, RecordingBuilder())

        assert calls == [
            ("tag", "a", "1"),
            ("annotation", 10, "first"),
            ("tag", "b", "2"),
            ("annotation", 20, "second"),
        ]

    def test_duplicate_tags_preserved(self, span):
        span.tag("error", "timeout")
        span.tag("error", "retry")
        record = export(span)
        assert record.tags == (("error", "timeout"), ("error", "retry"))
        assert record.tag_values("error") == ["timeout", "retry"]

    def test_tag_values_coerced_to_str(self, span):
        span.tag("http.status_code", 200)
        assert export(span).tags == (("http.status_code", "200"),)

    def test_mutation_after_finish_accepted(self, span):
        span.start(1)
        span.finish(5)
        span.tag("late", "yes")
        span.annotate("late.event", 6)
        record = export(span)
        assert record.tags == (("late", "yes"),)
        assert record.annotations == ((6, "late.event"),)


class TestFields:

    def test_name_and_endpoint_last_write_wins(self, span):
        span.set_name("get")
        span.set_name("post")
        span.set_remote_endpoint(Endpoint(service_name="old"))
        remote = Endpoint(service_name="backend", ipv4="10.0.0.1", port=8080)
        span.set_remote_endpoint(remote)

        record = export(span)

        assert record.name == "post"
        assert record.remote_endpoint == remote

    def test_shared_absent_unless_set(self, span):
        assert export(span).shared is None
        span.set_shared()
        assert export(span).shared is True

    def test_kind_absent_unless_set(self, span):
        assert export(span).kind is None
        span.set_kind(Kind.PRODUCER)
        assert export(span).kind is Kind.PRODUCER

    def test_write_to_does_not_mutate(self, span):
        span.start(1000)
        span.tag("k", "v")
        span.finish(2000)
        first = export(span)
        second = export(span)
        assert first == second


class OldKind(Enum):
    CLIENT = 0
    SERVER = 1


class TestKindVersionSkew:
    """Kind ordinals are resolved against the exporter's enumeration."""

    def test_in_bounds_kind_resolved_by_ordinal(self, span):
        span.set_kind(Kind.SERVER)
        record = export(span, SpanRecordBuilder(kind_type=OldKind))
        assert record.kind is OldKind.SERVER

    def test_out_of_bounds_kind_omitted(self, span, caplog):
        span.set_kind(Kind.CONSUMER)
        with caplog.at_level(logging.DEBUG, logger="tracelet.tracer.mutable_span"):
            record = export(span, SpanRecordBuilder(kind_type=OldKind))
        assert record.kind is None
        assert any("Dropped kind index 3" in r.getMessage() for r in caplog.records)


class TestConcurrency:

    def test_concurrent_tags_all_recorded(self, span):
        threads = []
        per_thread = 200

        def worker(n):
            for i in range(per_thread):
                span.tag(f"t{n}", str(i))

        for n in range(8):
            threads.append(threading.Thread(target=worker, args=(n,)))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        record = export(span)
        assert len(record.tags) == 8 * per_thread
        for n in range(8):
            assert record.tag_values(f"t{n}") == [str(i) for i in range(per_thread)]


def test_repr_summarizes_state(span):
    span.set_name("query")
    span.tag("k", "v")
    assert "query" in repr(span)
    assert "pairs=1" in repr(span)

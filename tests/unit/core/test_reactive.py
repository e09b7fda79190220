"""Tests for Reactive cells: writes, subscriptions, middleware, batching and dispose."""

import pytest

from fluxivity import DisposedError, FluxivityError, Reactive, Snapshot
from tests.utils import RecordingMiddleware, SnapshotRecorder


def test_reactive_stores_and_returns_value():
    """Test that a reactive cell returns its initial value."""
    cell = Reactive(42)

    assert cell.value == 42


def test_reactive_assignment_updates_value():
    """Test that assigning to value replaces it."""
    cell = Reactive("initial")

    cell.value = "changed"

    assert cell.value == "changed"


def test_reactive_set_returns_cell_for_chaining():
    """Test that set() returns the cell itself."""
    cell = Reactive(0)

    assert cell.set(1) is cell
    assert cell.value == 1


def test_reactive_subscriber_receives_current_value_first(recorder):
    """Test that a new subscriber immediately receives a same-value snapshot."""
    cell = Reactive(7)

    cell.subscribe(recorder)

    assert recorder.snapshots == [Snapshot(7, 7)]


def test_reactive_notifies_subscribers_in_order(recorder):
    """Test that every change reaches the subscriber in emission order."""
    cell = Reactive(0)
    cell.add_effect(recorder)

    cell.value = 1
    cell.value = 2
    cell.value = 3

    assert recorder.values == [0, 1, 2, 3]
    assert recorder.snapshots[2] == Snapshot(1, 2)


def test_reactive_late_subscriber_receives_latest_snapshot(recorder):
    """Test that subscribing after changes replays only the most recent one."""
    cell = Reactive(0)
    cell.value = 1
    cell.value = 2

    cell.subscribe(recorder)

    assert recorder.snapshots == [Snapshot(1, 2)]


def test_reactive_equal_value_is_not_emitted(recorder):
    """Test that writing an equal value emits nothing."""
    cell = Reactive(5)
    cell.subscribe(recorder)

    cell.value = 5
    cell.value = 5

    assert recorder.values == [5]


def test_reactive_equal_value_uses_value_equality(recorder):
    """Test that a distinct but equal object is treated as no change."""
    cell = Reactive([1, 2, 3])
    cell.subscribe(recorder)

    cell.value = [1, 2, 3]

    assert len(recorder.snapshots) == 1


def test_reactive_equal_value_skips_middleware(middleware):
    """Test that no middleware hook fires for an equal-value write."""
    cell = Reactive(5, middlewares=[middleware])

    cell.value = 5

    assert middleware.events == []


def test_reactive_middleware_hooks_run_in_pipeline_order(middleware):
    """Test the before -> after -> should_emit hook order."""
    cell = Reactive(0, middlewares=[middleware])

    cell.value = 1

    assert middleware.events == [
        "before: 0 -> 1",
        "after: 0 -> 1",
        "should_emit: 0 -> 1",
    ]


def test_reactive_value_is_replaced_between_before_and_after_hooks():
    """Test that before_update sees the old value stored and after_update the new one."""
    seen = []

    class Probe(RecordingMiddleware):
        def before_update(self, old_value, new_value):
            seen.append(("before", cell.value))

        def after_update(self, old_value, new_value):
            seen.append(("after", cell.value))

    cell = Reactive(0, middlewares=[Probe()])
    cell.value = 1

    assert seen == [("before", 0), ("after", 1)]


def test_reactive_multiple_middleware_run_in_list_order():
    """Test that several middleware are invoked in the order given."""
    order = []

    class Named(RecordingMiddleware):
        def __init__(self, label):
            super().__init__()
            self.label = label

        def before_update(self, old_value, new_value):
            order.append(f"{self.label}.before")

        def after_update(self, old_value, new_value):
            order.append(f"{self.label}.after")

    cell = Reactive(0, middlewares=[Named("a"), Named("b")])
    cell.value = 1

    assert order == ["a.before", "b.before", "a.after", "b.after"]


def test_reactive_should_emit_veto_suppresses_emission(recorder):
    """Test that a middleware returning False keeps the snapshot from subscribers."""
    veto = RecordingMiddleware(emit=False)
    cell = Reactive(0, middlewares=[veto])
    cell.subscribe(recorder)

    cell.value = 1
    cell.value = 2

    assert recorder.values == [0]
    assert cell.value == 2
    assert len(veto.events) == 6


def test_reactive_single_veto_does_not_skip_other_middleware(recorder):
    """Test that every middleware still runs its hooks when one vetoes."""
    veto = RecordingMiddleware(emit=False)
    allow = RecordingMiddleware(emit=True)
    cell = Reactive(0, middlewares=[veto, allow])
    cell.subscribe(recorder)

    cell.value = 1

    assert recorder.values == [0]
    assert allow.events == [
        "before: 0 -> 1",
        "after: 0 -> 1",
        "should_emit: 0 -> 1",
    ]


def test_reactive_middleware_list_is_shared_by_reference():
    """Test that the cell keeps the caller's middleware list."""
    middlewares = [RecordingMiddleware()]
    cell = Reactive(0, middlewares=middlewares)

    assert cell.middlewares is middlewares


def test_reactive_before_update_exception_propagates_to_writer():
    """Test that a failing before_update hook surfaces to the caller."""

    class Failing(RecordingMiddleware):
        def before_update(self, old_value, new_value):
            raise RuntimeError("hook failed")

    cell = Reactive(0, middlewares=[Failing()])

    with pytest.raises(RuntimeError, match="hook failed"):
        cell.value = 1
    assert cell.value == 0


def test_reactive_after_update_exception_propagates_after_value_replaced():
    """Test that a failing after_update hook surfaces after the value changed."""

    class Failing(RecordingMiddleware):
        def after_update(self, old_value, new_value):
            raise ValueError("after failed")

    cell = Reactive(0, middlewares=[Failing()])

    with pytest.raises(ValueError, match="after failed"):
        cell.value = 1
    assert cell.value == 1


def test_reactive_on_error_is_never_called_by_writes(middleware):
    """Test that writes never route anything to on_error."""
    cell = Reactive(0, middlewares=[middleware])

    cell.value = 1
    cell.value = 2

    assert middleware.errors == []


def test_reactive_batch_publishes_only_final_value(recorder):
    """Test that a batch coalesces intermediate values."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    cell.start_batch()
    cell.value = 1
    cell.value = 2
    cell.value = 3
    cell.end_batch()

    assert recorder.values == [0, 3]
    assert recorder.snapshots[-1] == Snapshot(2, 3)


def test_reactive_batch_publish_all_emits_every_value(recorder):
    """Test that publish_all releases every buffered snapshot in order."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    cell.start_batch()
    cell.value = 1
    cell.value = 2
    cell.value = 3
    cell.end_batch(publish_all=True)

    assert recorder.values == [0, 1, 2, 3]


def test_reactive_nested_batch_flushes_only_at_outermost_end(recorder):
    """Test that inner end_batch does not flush while the outer batch is open."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    cell.start_batch()
    cell.value = 1
    cell.start_batch()
    cell.value = 2
    cell.value = 3
    cell.end_batch()
    assert recorder.values == [0]

    cell.value = 4
    cell.end_batch()

    assert recorder.values == [0, 4]


def test_reactive_value_is_current_during_batch():
    """Test that reads inside a batch see the latest write."""
    cell = Reactive(0)

    cell.start_batch()
    cell.value = 10

    assert cell.value == 10
    assert cell.is_batching
    cell.end_batch()
    assert not cell.is_batching


def test_reactive_end_batch_without_start_is_noop(recorder):
    """Test that an unmatched end_batch changes nothing."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    cell.end_batch()
    cell.value = 1

    assert recorder.values == [0, 1]


def test_reactive_batch_with_vetoed_changes_publishes_nothing(recorder):
    """Test that vetoed snapshots are never buffered."""
    cell = Reactive(0, middlewares=[RecordingMiddleware(emit=False)])
    cell.subscribe(recorder)

    with cell.batch():
        cell.value = 1
        cell.value = 2

    assert recorder.values == [0]


def test_reactive_batch_context_manager(recorder):
    """Test the batch() context manager form."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    with cell.batch() as batched:
        assert batched is cell
        cell.value = 1
        cell.value = 2

    assert recorder.values == [0, 2]


def test_reactive_batch_context_manager_flushes_on_exception(recorder):
    """Test that the batch is closed even when the block raises."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    with pytest.raises(KeyError):
        with cell.batch(publish_all=True):
            cell.value = 1
            raise KeyError("boom")

    assert recorder.values == [0, 1]
    assert not cell.is_batching


def test_reactive_unsubscribe_stops_delivery_to_that_listener():
    """Test that disposing a subscription handle only affects that listener."""
    cell = Reactive(0)
    kept, dropped = SnapshotRecorder(), SnapshotRecorder()
    cell.subscribe(kept)
    handle = cell.subscribe(dropped)

    handle.dispose()
    cell.value = 1

    assert kept.values == [0, 1]
    assert dropped.values == [0]
    assert cell.value == 1


def test_reactive_dispose_rejects_writes():
    """Test that writing a new value to a disposed cell raises."""
    cell = Reactive(0)
    cell.dispose()

    with pytest.raises(DisposedError):
        cell.value = 1
    with pytest.raises(FluxivityError):
        cell.set(2)
    assert cell.value == 0


def test_reactive_dispose_rejects_equal_value_write():
    """Test that even an equal-value write to a disposed cell raises."""
    cell = Reactive(3)
    cell.dispose()

    with pytest.raises(DisposedError, match="write to"):
        cell.value = 3

    assert cell.value == 3


def test_reactive_dispose_rejects_subscriptions():
    """Test that subscribing to a disposed cell raises."""
    cell = Reactive(0)
    cell.dispose()

    with pytest.raises(DisposedError, match="subscribe"):
        cell.subscribe(lambda _: None)
    with pytest.raises(DisposedError):
        cell.add_effect(lambda _: None)
    with pytest.raises(DisposedError):
        cell.stream


def test_reactive_dispose_completes_and_stops_subscribers():
    """Test that dispose completes listeners and nothing reaches them afterwards."""
    cell = Reactive(0)
    recorder = SnapshotRecorder()
    cell.subscribe(recorder, on_completed=recorder.on_completed)

    cell.value = 1
    cell.dispose()

    with pytest.raises(DisposedError):
        cell.value = 2

    assert recorder.values == [0, 1]
    assert recorder.completed
    assert cell.is_disposed


def test_reactive_dispose_discards_open_batch(recorder):
    """Test that disposing mid-batch drops the buffered snapshots."""
    cell = Reactive(0)
    cell.subscribe(recorder)

    cell.start_batch()
    cell.value = 1
    cell.dispose()
    cell.end_batch()

    assert recorder.values == [0]


def test_reactive_dispose_is_idempotent():
    """Test that disposing twice is harmless."""
    cell = Reactive(0)

    cell.dispose()
    cell.dispose()

    assert cell.is_disposed


def test_reactive_write_from_listener_keeps_emission_order():
    """Test that a listener writing to its own cell does not reorder snapshots."""
    cell = Reactive(0)
    recorder = SnapshotRecorder()

    def bump(snapshot):
        if snapshot.new_value == 1:
            cell.value = 2

    cell.subscribe(bump)
    cell.subscribe(recorder)

    cell.value = 1

    assert cell.value == 2
    assert recorder.values == [0, 1, 2]
    assert recorder.snapshots[-1] == Snapshot(1, 2)


def test_reactive_late_subscriber_during_nested_write_sees_both_changes():
    """Test that a subscriber added mid-delivery gets the queued snapshot too."""
    cell = Reactive(0)
    late = SnapshotRecorder()

    def bump_and_join(snapshot):
        if snapshot.new_value == 1:
            cell.value = 2
            cell.subscribe(late)

    cell.subscribe(bump_and_join)
    cell.value = 1

    assert late.values == [1, 2]


def test_reactive_stream_supports_rx_operators():
    """Test that the stream property works with rx operators."""
    from rx import operators as ops

    cell = Reactive(1)
    doubled = []
    cell.stream.pipe(ops.map(lambda s: s.new_value * 2)).subscribe(on_next=doubled.append)

    cell.value = 5

    assert doubled == [2, 10]


def test_reactive_repr_includes_name_and_value():
    """Test the reactive repr."""
    assert repr(Reactive(3, name="count")) == "Reactive('count', 3)"
    assert Reactive(0).name == "<unnamed>"

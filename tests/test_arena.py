import io

import pytest

from framestack.core.arena import ArenaStats, FrameArena
from framestack.core.errors import InvalidFrameIndexError, RefCountUnderflowError
from framestack.core.stack import TypeStack
from framestack.core.types import DataKind, Frame


def _chain(arena: FrameArena, *kinds: DataKind) -> TypeStack:
    stack = TypeStack()
    for kind in kinds:
        stack.push(arena, kind)
    return stack


def test_allocate_appends_slots_with_single_reference():
    arena = FrameArena(initial_capacity=4)
    first = arena.allocate(Frame(DataKind.Int))
    second = arena.allocate(Frame(DataKind.Ptr, previous=first))

    assert (first, second) == (0, 1)
    assert arena.ref_count(first) == 1
    assert arena.ref_count(second) == 1
    assert arena.deref(second) == Frame(DataKind.Ptr, previous=0)
    assert arena.deref(first).is_bottom
    assert not arena.deref(second).is_bottom
    assert len(arena) == 2


def test_allocate_grows_past_initial_capacity():
    arena = FrameArena(initial_capacity=1)
    _chain(arena, DataKind.Int, DataKind.Ptr, DataKind.Bool, DataKind.Int, DataKind.Ptr)

    assert arena.capacity == 8
    assert arena.live_indices() == (0, 1, 2, 3, 4)


def test_allocate_rejects_dead_back_link():
    arena = FrameArena(initial_capacity=2)
    with pytest.raises(InvalidFrameIndexError):
        arena.allocate(Frame(DataKind.Int, previous=3))


def test_release_cascades_and_frees_oldest_first():
    arena = FrameArena(initial_capacity=4)
    stack = _chain(arena, DataKind.Int, DataKind.Ptr)

    stack.drop(arena)

    assert len(arena) == 0
    assert arena.free_indices() == (0, 1)
    assert not arena.is_live(0)
    assert not arena.is_live(1)


def test_release_stops_at_shared_ancestor():
    arena = FrameArena(initial_capacity=4)
    base = _chain(arena, DataKind.Int)
    branch = base.clone(arena)
    branch.push(arena, DataKind.Bool)

    branch.drop(arena)

    assert arena.free_indices() == (1,)
    assert arena.ref_count(0) == 1
    assert list(base.dump(arena)) == [DataKind.Int]


def test_allocate_reuses_most_recently_freed_index():
    arena = FrameArena(initial_capacity=4)
    stack = _chain(arena, DataKind.Int, DataKind.Ptr)
    stack.drop(arena)

    reused = arena.allocate(Frame(DataKind.Bool))

    assert reused == 1
    assert arena.ref_count(reused) == 1
    assert arena.deref(reused) == Frame(DataKind.Bool)
    assert arena.free_indices() == (0,)


def test_acquire_on_free_slot_is_rejected():
    arena = FrameArena(initial_capacity=2)
    stack = _chain(arena, DataKind.Int)
    stack.drop(arena)

    with pytest.raises(InvalidFrameIndexError):
        arena.acquire(0)
    with pytest.raises(InvalidFrameIndexError):
        arena.acquire(5)


def test_release_below_zero_is_rejected():
    arena = FrameArena(initial_capacity=2)
    stack = _chain(arena, DataKind.Int)
    stack.drop(arena)

    with pytest.raises(RefCountUnderflowError):
        arena.release(0)
    with pytest.raises(InvalidFrameIndexError):
        arena.release(-1)


def test_underflow_inside_cascade_leaves_arena_untouched():
    arena = FrameArena(initial_capacity=4)
    dead = _chain(arena, DataKind.Int)
    live = _chain(arena, DataKind.Bool)
    dead.drop(arena)
    slot = arena.deref_mut(live.top)
    slot.previous = 0

    with pytest.raises(RefCountUnderflowError):
        arena.release(live.top)

    assert arena.ref_count(live.top) == 1
    assert arena.is_live(live.top)
    assert arena.free_indices() == (0,)


def test_deref_out_of_bounds_returns_none():
    arena = FrameArena(initial_capacity=8)
    _chain(arena, DataKind.Int)

    assert arena.deref(1) is None
    assert arena.deref(-1) is None
    assert arena.deref_mut(7) is None


def test_deref_mut_writes_through_to_slot():
    arena = FrameArena(initial_capacity=2)
    stack = _chain(arena, DataKind.Int)

    slot = arena.deref_mut(stack.top)
    assert slot is not None
    slot.data_type = DataKind.Bool

    assert arena.deref(stack.top) == Frame(DataKind.Bool)
    assert slot.ref_count == 1
    assert slot.freeze() == Frame(DataKind.Bool)


def test_dump_writes_live_slots_as_digraph():
    arena = FrameArena(initial_capacity=4)
    stack = _chain(arena, DataKind.Int, DataKind.Ptr)
    branch = stack.clone(arena)
    branch.push(arena, DataKind.Bool)
    branch.drop(arena)

    sink = io.StringIO()
    arena.dump(sink)

    assert sink.getvalue() == (
        "digraph Stacks {\n"
        '    node_0 [label="Int (1)"]\n'
        '    node_1 [label="Ptr (1)"]\n'
        "    node_1 -> node_0\n"
        "}\n"
    )


def test_dump_does_not_mutate_state():
    arena = FrameArena(initial_capacity=4)
    stack = _chain(arena, DataKind.Int, DataKind.Ptr)
    stack.clone(arena)

    before = arena.stats()
    first = arena.to_dot()
    second = arena.to_dot()

    assert first == second
    assert arena.stats() == before


def test_stats_reports_occupancy():
    arena = FrameArena(initial_capacity=4)
    stack = _chain(arena, DataKind.Int, DataKind.Ptr, DataKind.Bool)
    stack.clone(arena)
    stack.pop(arena)

    stats = arena.stats()

    assert stats == ArenaStats(live=3, free=0, capacity=4, total_references=4)
    assert stats.slots == 3


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        FrameArena(initial_capacity=0)

"""Property-based tests for PlaylistHistoryEngine using Hypothesis.

These tests validate invariants that should hold for any sequence of user
actions: undo/redo inverse law, linear history, no-op safety, id uniqueness
and the history log replaying to the live playlist.
"""

from hypothesis import given, strategies as st
from playlist_history import ItemIdFactory, PlaylistHistoryEngine
from playlist_history.commands import replay_history

# An action is (operation, argument). For "remove" the argument picks an item by
# position (modulo the playlist length) or, when the playlist is empty, a missing id.
actions = st.lists(
    st.one_of(
        st.tuples(st.just("add"), st.text(alphabet="abcdefgh", min_size=1, max_size=5)),
        st.tuples(st.just("remove"), st.integers(min_value=0, max_value=20)),
        st.tuples(st.just("clear"), st.none()),
        st.tuples(st.just("undo"), st.none()),
        st.tuples(st.just("redo"), st.none()),
    ),
    max_size=40,
)


def new_engine():
    return PlaylistHistoryEngine(id_factory=ItemIdFactory("item"))


def run(engine, steps):
    for operation, arg in steps:
        if operation == "add":
            engine.add_item(arg)
        elif operation == "remove":
            items = engine.current_items()
            engine.remove_item(items[arg % len(items)].id if items else "missing")
        elif operation == "clear":
            engine.clear_all()
        elif operation == "undo":
            engine.undo()
        else:
            engine.redo()


class TestHistoryProperties:
    """Invariants over arbitrary action sequences."""

    @given(steps=actions)
    def test_past_replays_to_current_items(self, steps):
        """Replaying the undo stack from empty reproduces the live playlist."""
        engine = new_engine()
        run(engine, steps)

        assert replay_history(engine.state.past) == engine.current_items()

    @given(steps=actions)
    def test_undo_then_redo_restores_items(self, steps):
        """Undo immediately followed by redo is an identity on the playlist."""
        engine = new_engine()
        run(engine, steps)
        before = engine.current_items()
        depths = (engine.undo_depth(), engine.redo_depth())

        if engine.undo():
            assert engine.redo() is True
        assert engine.current_items() == before
        assert (engine.undo_depth(), engine.redo_depth()) == depths

    @given(steps=actions, name=st.text(alphabet="xyz", min_size=1, max_size=3))
    def test_new_command_truncates_future(self, steps, name):
        """Any new add after an undo leaves nothing to redo."""
        engine = new_engine()
        run(engine, steps)
        engine.undo()

        engine.add_item(name)

        assert engine.can_redo() is False
        assert engine.redo() is False

    @given(steps=actions)
    def test_ids_unique(self, steps):
        """No two live items ever share an id."""
        engine = new_engine()
        run(engine, steps)

        ids = [item.id for item in engine.current_items()]
        assert len(ids) == len(set(ids))

    @given(steps=actions)
    def test_remove_unknown_id_is_noop(self, steps):
        """Removing an id that is not live changes nothing."""
        engine = new_engine()
        run(engine, steps)
        before = engine.state.model_copy(deep=True)

        engine.remove_item("never-issued")

        assert engine.state == before

    @given(steps=actions)
    def test_clear_then_undo_restores_sequence(self, steps):
        """Clearing and undoing gives back the exact prior sequence."""
        engine = new_engine()
        run(engine, steps)
        before = engine.current_items()

        engine.clear_all()
        if before:
            assert engine.undo() is True
        assert engine.current_items() == before

    @given(steps=actions)
    def test_undo_all_then_redo_all(self, steps):
        """Unwinding the whole history empties the playlist; rewinding it restores it."""
        engine = new_engine()
        run(engine, steps)
        before = engine.current_items()

        undone = 0
        while engine.undo():
            undone += 1
        assert engine.current_items() == []
        assert engine.can_undo() is False

        for _ in range(undone):
            assert engine.redo() is True
        assert engine.current_items() == before

    @given(steps=actions)
    def test_flags_match_stacks(self, steps):
        engine = new_engine()
        run(engine, steps)

        assert engine.can_undo() == (engine.undo_depth() > 0)
        assert engine.can_redo() == (engine.redo_depth() > 0)


@given(steps=actions)
def test_empty_stacks_are_safe(steps):
    """Undo/redo on exhausted stacks return False without touching the playlist."""
    engine = new_engine()
    run(engine, steps)
    while engine.redo():
        pass
    before = engine.current_items()

    assert engine.redo() is False
    assert engine.current_items() == before


@given(steps=actions)
def test_snapshot_restores_from_dumped_dicts(steps):
    """A snapshot dumped to plain data restores the same playlist on a fresh engine."""
    engine = new_engine()
    run(engine, steps)

    other = new_engine()
    other.restore_items(engine.snapshot().model_dump()["items"])

    assert other.current_items() == engine.current_items()
    added = other.add_item("new")
    assert added.id not in {item.id for item in engine.current_items()}

from resumark.core.annotations.models import HighlightAnnotation
from resumark.core.annotations.undo_redo import HistoryLog


def _highlight(n):
    return HighlightAnnotation(id=f"highlight-{n}", page=0, x=n, y=n, width=10, height=10)


def test_starts_with_empty_entry():
    history = HistoryLog()

    assert len(history) == 1
    assert history.current == ()
    assert not history.can_undo()
    assert not history.can_redo()


def test_undo_and_redo_walk_the_log():
    history = HistoryLog()
    a, b = _highlight(1), _highlight(2)
    history.push_state([a])
    history.push_state([a, b])

    assert history.undo() == (a,)
    assert history.undo() == ()
    assert history.undo() is None
    assert history.redo() == (a,)
    assert history.redo() == (a, b)
    assert history.redo() is None


def test_push_after_undo_discards_redo_branch():
    history = HistoryLog()
    a, b, c = _highlight(1), _highlight(2), _highlight(3)
    history.push_state([a])
    history.push_state([a, b])
    history.undo()

    history.push_state([a, c])

    assert not history.can_redo()
    assert len(history) == 3
    assert history.current == (a, c)


def test_snapshots_are_independent_of_the_live_list():
    history = HistoryLog()
    live = [_highlight(1)]
    history.push_state(live)

    live.append(_highlight(2))

    assert len(history.current) == 1


def test_max_size_drops_oldest_entries():
    history = HistoryLog(max_size=3)
    for n in range(5):
        history.push_state([_highlight(n)])

    assert len(history) == 3
    assert history.index == 2
    assert history.current == (_highlight(4),)
    history.undo()
    history.undo()
    assert not history.can_undo()


def test_clear_resets_to_empty_entry():
    history = HistoryLog()
    history.push_state([_highlight(1)])

    history.clear()

    assert len(history) == 1
    assert history.current == ()

import time

import pytest
from PyQt5.QtCore import QTimer

from resumark.controllers import EditorController
from resumark.core.editor import EditorSession, ToolMode
from resumark.core.export.save_worker import SaveWorker


@pytest.fixture
def controller(qapp, session):
    return EditorController(session)


@pytest.fixture
def sync_worker(monkeypatch):
    """Run save workers on the calling thread."""
    monkeypatch.setattr(SaveWorker, "start", SaveWorker.run)


def _record(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


def test_placing_text_emits_each_change(controller):
    changed = _record(controller.annotations_changed)
    selected = _record(controller.selection_changed)
    tools = _record(controller.tool_changed)
    history = _record(controller.history_changed)

    controller.set_tool(ToolMode.PLACE_TEXT)
    controller.click(50, 50)

    assert len(changed) == 1
    assert selected[-1][0].text == "New Text"
    assert [t[0] for t in tools] == [ToolMode.PLACE_TEXT, ToolMode.SELECT]
    assert history == [(True, False)]


def test_noop_emits_nothing(controller):
    changed = _record(controller.annotations_changed)
    history = _record(controller.history_changed)

    assert not controller.undo()
    controller.click(10, 10)

    assert changed == []
    assert history == []


def test_page_and_zoom_signals(controller):
    pages = _record(controller.page_changed)
    zooms = _record(controller.zoom_changed)

    controller.next_page()
    controller.zoom_in()
    controller.set_scale(5)

    assert pages == [(1,)]
    assert zooms == [(1.1,), (2.0,)]


def test_undo_redo_report_history(controller):
    history = _record(controller.history_changed)
    controller.session.create_text(0, 0, 0)

    controller.undo()
    controller.redo()

    assert history == [(False, True), (True, False)]


def test_pending_edit_discards_redo(controller):
    session = controller.session
    first = session.create_text(0, 0, 0, "A")
    session.create_text(0, 50, 50, "B")
    session.undo()
    session.select(first)
    history = _record(controller.history_changed)

    controller.update_selected_text("Edited")

    assert history == [(True, False)]


def test_save_success(controller, sync_worker):
    finished = _record(controller.save_finished)
    started = _record(controller.save_started)
    received = []
    controller.session.create_text(0, 0, 0)

    assert controller.save(lambda annotations: received.extend(annotations))

    assert started == [()]
    assert finished[0][0] is True
    assert len(received) == 1
    assert not controller.is_saving
    assert not controller.session.has_unsaved_changes
    assert controller.save_worker is None


def test_save_failure_keeps_session(controller, sync_worker):
    finished = _record(controller.save_finished)
    controller.session.create_text(0, 0, 0)

    def broken_sink(annotations):
        raise OSError("disk full")

    controller.save(broken_sink)

    success, message = finished[0]
    assert not success
    assert "disk full" in message
    assert not controller.is_saving
    assert len(controller.session.annotations) == 1
    assert controller.can_undo()
    assert controller.session.last_save_error == message


def test_save_refused_while_pending(controller):
    controller.session.begin_save()

    assert not controller.save(lambda annotations: True)


def test_history_disabled_while_saving(controller):
    controller.session.create_text(0, 0, 0)
    history = _record(controller.history_changed)

    controller.session.begin_save()
    controller._on_save_finished(False, "nope")

    assert history[-1] == (True, False)


def test_worker_reports_false_result(qapp):
    worker = SaveWorker(lambda annotations: False, [])
    finished = _record(worker.save_done)

    worker.run()

    assert finished == [(False, "The annotations could not be stored.")]


def test_worker_reports_count(qapp):
    session = EditorSession()
    session.create_highlight(0, 0, 0, 50, 50)
    worker = SaveWorker(lambda annotations: None, list(session.annotations))
    finished = _record(worker.save_done)

    worker.run()

    assert finished == [(True, "Saved 1 annotations.")]


def test_threaded_save_survives_worker_still_running(qapp, controller, monkeypatch):
    original_run = SaveWorker.run

    def slow_exit(worker):
        original_run(worker)
        # The result is already out, the thread lingers before exiting
        time.sleep(0.2)

    monkeypatch.setattr(SaveWorker, "run", slow_exit)
    finished = _record(controller.save_finished)
    controller.save_finished.connect(qapp.quit)
    QTimer.singleShot(5000, qapp.quit)
    controller.session.create_text(0, 0, 0, "Keep me")

    assert controller.save(lambda annotations: False)
    qapp.exec_()

    assert finished == [(False, "The annotations could not be stored.")]
    assert controller.save_worker is None
    assert not controller.is_saving
    assert [a.text for a in controller.session.annotations] == ["Keep me"]

    # A retry starts a fresh worker
    QTimer.singleShot(5000, qapp.quit)
    assert controller.save(lambda annotations: True)
    qapp.exec_()

    assert finished[-1][0] is True
    assert not controller.session.has_unsaved_changes

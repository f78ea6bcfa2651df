import re

import pytest

from resumark.core.annotations import (
    AnnotationManager, HighlightAnnotation, TextAnnotation
)


@pytest.fixture
def manager():
    return AnnotationManager()


def test_create_text_appends_and_records_history(manager):
    ann_id = manager.create_text(0, 10, 20, "Hello", 12, (255, 0, 0))

    ann = manager.get(ann_id)
    assert isinstance(ann, TextAnnotation)
    assert (ann.page, ann.x, ann.y, ann.text, ann.font_size, ann.color) == \
        (0, 10, 20, "Hello", 12, (255, 0, 0))
    assert len(manager.history) == 2
    assert manager.can_undo()


def test_ids_are_prefixed_by_type(manager):
    text_id = manager.create_text(0, 0, 0)
    highlight_id = manager.create_highlight(0, 0, 0, 50, 20)

    assert re.fullmatch(r"text-[0-9a-f]{12}", text_id)
    assert re.fullmatch(r"highlight-[0-9a-f]{12}", highlight_id)


def test_ids_are_not_reused_after_delete(manager):
    first = manager.create_text(0, 0, 0)
    manager.delete(first)
    second = manager.create_text(0, 0, 0)

    assert first != second


@pytest.mark.parametrize("width,height", [(5, 50), (50, 5), (0, 0), (3, 100)])
def test_degenerate_highlight_is_discarded(manager, width, height):
    assert manager.create_highlight(0, 10, 10, width, height) is None
    assert manager.annotations == []
    assert len(manager.history) == 1


def test_highlight_just_over_threshold_is_kept(manager):
    ann_id = manager.create_highlight(1, 10, 10, 5.5, 5.5)

    assert isinstance(manager.get(ann_id), HighlightAnnotation)


def test_rejects_negative_page_and_bad_font_size(manager):
    assert manager.create_text(-1, 0, 0) is None
    assert manager.create_text(0, 0, 0, font_size=0) is None
    assert manager.create_highlight(-1, 0, 0, 50, 50) is None


def test_delete_unknown_id_is_noop(manager):
    manager.create_text(0, 0, 0)

    assert not manager.delete("text-000000000000")
    assert len(manager.history) == 2


def test_undo_redo_restore_snapshots(manager):
    a = manager.create_text(0, 0, 0, "A")
    b = manager.create_highlight(0, 0, 0, 40, 40)

    assert manager.undo()
    assert [ann.id for ann in manager.annotations] == [a]
    assert manager.undo()
    assert manager.annotations == []
    assert not manager.undo()

    assert manager.redo()
    assert manager.redo()
    assert [ann.id for ann in manager.annotations] == [a, b]
    assert not manager.redo()


def test_new_action_clears_redo(manager):
    manager.create_text(0, 0, 0, "A")
    manager.create_text(0, 0, 0, "B")
    manager.undo()

    manager.create_text(0, 0, 0, "C")

    assert not manager.can_redo()
    assert [ann.text for ann in manager.annotations] == ["A", "C"]


def test_update_text_is_pending_until_committed(manager):
    ann_id = manager.create_text(0, 0, 0, "Draft")

    assert manager.update_text(ann_id, "Dra")
    assert manager.update_text(ann_id, "Final")

    assert manager.get(ann_id).text == "Final"
    assert len(manager.history) == 2
    assert manager.has_pending_edit()
    assert not manager.can_redo()

    assert manager.commit_text_edit()
    assert len(manager.history) == 3
    assert not manager.commit_text_edit()


def test_undo_reverts_a_pending_edit_in_one_step(manager):
    ann_id = manager.create_text(0, 0, 0, "Draft")
    manager.update_text(ann_id, "Edited")

    manager.undo()

    assert manager.get(ann_id).text == "Draft"
    manager.redo()
    assert manager.get(ann_id).text == "Edited"


def test_update_text_ignores_highlights_and_unknown_ids(manager):
    highlight_id = manager.create_highlight(0, 0, 0, 40, 40)

    assert not manager.update_text(highlight_id, "nope")
    assert not manager.update_text("text-missing", "nope")
    assert not manager.has_pending_edit()


def test_hit_test_returns_topmost_on_page(manager):
    below = manager.create_highlight(0, 0, 0, 100, 100)
    above = manager.create_highlight(0, 50, 50, 100, 100)
    manager.create_highlight(1, 0, 0, 100, 100)

    assert manager.get_annotation_at_point(0, 75, 75).id == above
    assert manager.get_annotation_at_point(0, 10, 10).id == below
    assert manager.get_annotation_at_point(0, 300, 300) is None
    assert len(manager.get_annotations_for_page(0)) == 2


def test_unsaved_changes_track_saved_snapshot(manager):
    assert not manager.has_unsaved_changes
    manager.create_text(0, 0, 0)
    assert manager.has_unsaved_changes

    manager.mark_saved()
    assert not manager.has_unsaved_changes

    manager.undo()
    assert manager.has_unsaved_changes
    assert manager.get_annotation_count() == 0

"""
Main annotation manager that owns the live annotation list and its history.
"""
import logging
import uuid
from typing import List, Optional, Set

from .models import (
    Annotation, AnnotationType, BLACK, Color, HighlightAnnotation,
    TextAnnotation, YELLOW
)
from .undo_redo import HistoryLog

log = logging.getLogger(__name__)

DEFAULT_MIN_HIGHLIGHT_SIZE = 5.0


class AnnotationManager:
    """Manages all annotations for one editing session with undo/redo support."""

    def __init__(self, min_highlight_size: float = DEFAULT_MIN_HIGHLIGHT_SIZE,
                 history_limit: Optional[int] = None):
        self.annotations: List[Annotation] = []
        self.history = HistoryLog(history_limit)
        self.min_highlight_size = min_highlight_size

        # Every id handed out this session, deleted ones included
        self._issued_ids: Set[str] = set()

        # Snapshot last handed to a persistence sink successfully
        self._saved_state: tuple = ()

    def _new_id(self, annotation_type: AnnotationType) -> str:
        while True:
            candidate = f"{annotation_type.value}-{uuid.uuid4().hex[:12]}"
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate

    def _commit(self) -> None:
        """Push the live list onto the history."""
        self.history.push_state(self.annotations)

    def create_text(self, page: int, x: float, y: float, text: str = "New Text",
                    font_size: float = 14.0, color: Color = BLACK) -> Optional[str]:
        """
        Append a new text annotation.

        Args:
            page: 0-based page the annotation is anchored to
            x, y: Unscaled document coordinates
            text: Display string
            font_size: Unscaled font size, must be positive
            color: RGB tuple

        Returns:
            The new annotation id, or None if the arguments were rejected
        """
        if page < 0 or font_size <= 0:
            log.debug("Rejected text annotation on page %s size %s", page, font_size)
            return None

        self.commit_text_edit()
        annotation = TextAnnotation(
            id=self._new_id(AnnotationType.TEXT),
            page=page,
            x=x,
            y=y,
            text=text,
            font_size=font_size,
            color=color
        )
        self.annotations.append(annotation)
        self._commit()
        return annotation.id

    def create_highlight(self, page: int, x: float, y: float, width: float,
                         height: float, color: Color = YELLOW) -> Optional[str]:
        """
        Append a new highlight if both extents exceed the discard threshold.

        Args:
            page: 0-based page the annotation is anchored to
            x, y: Unscaled top-left corner
            width, height: Unscaled extents
            color: RGB tuple

        Returns:
            The new annotation id, or None for a degenerate rectangle
        """
        if page < 0:
            return None

        if width <= self.min_highlight_size or height <= self.min_highlight_size:
            log.debug("Discarded degenerate highlight %.1fx%.1f", width, height)
            return None

        self.commit_text_edit()
        annotation = HighlightAnnotation(
            id=self._new_id(AnnotationType.HIGHLIGHT),
            page=page,
            x=x,
            y=y,
            width=width,
            height=height,
            color=color
        )
        self.annotations.append(annotation)
        self._commit()
        return annotation.id

    def update_text(self, annotation_id: str, text: str) -> bool:
        """
        Replace the text of a text annotation without touching the history.

        The edit stays pending until ``commit_text_edit`` records it.

        Args:
            annotation_id: Id of a text annotation
            text: New display string

        Returns:
            True if the annotation was found and updated
        """
        for index, annotation in enumerate(self.annotations):
            if annotation.id == annotation_id:
                if not isinstance(annotation, TextAnnotation):
                    return False
                self.annotations[index] = annotation.with_text(text)
                return True
        return False

    def has_pending_edit(self) -> bool:
        """Check if the live list differs from the history cursor entry."""
        return tuple(self.annotations) != self.history.current

    def commit_text_edit(self) -> bool:
        """
        Record pending in-place edits as a single history entry.

        Returns:
            True if an entry was pushed
        """
        if not self.has_pending_edit():
            return False
        self._commit()
        return True

    def delete(self, annotation_id: str) -> bool:
        """
        Remove an annotation with undo support.

        Args:
            annotation_id: Id of the annotation to remove

        Returns:
            True if annotation was found and removed
        """
        if self.get(annotation_id) is None:
            return False

        self.commit_text_edit()
        self.annotations = [a for a in self.annotations if a.id != annotation_id]
        self._commit()
        return True

    def undo(self) -> bool:
        """
        Perform undo operation.

        Returns:
            True if undo was successful
        """
        self.commit_text_edit()
        previous_state = self.history.undo()
        if previous_state is None:
            return False
        self.annotations = list(previous_state)
        return True

    def redo(self) -> bool:
        """
        Perform redo operation.

        Returns:
            True if redo was successful
        """
        self.commit_text_edit()
        next_state = self.history.redo()
        if next_state is None:
            return False
        self.annotations = list(next_state)
        return True

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.history.can_undo() or self.has_pending_edit()

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.history.can_redo() and not self.has_pending_edit()

    def get(self, annotation_id: Optional[str]) -> Optional[Annotation]:
        """Look up a live annotation by id."""
        for annotation in self.annotations:
            if annotation.id == annotation_id:
                return annotation
        return None

    def get_annotations_for_page(self, page: int) -> List[Annotation]:
        """
        Get all annotations for a specific page.

        Args:
            page: 0-based page index

        Returns:
            List of annotations on the specified page, in creation order
        """
        return [ann for ann in self.annotations if ann.page == page]

    def get_annotation_at_point(self, page: int, x: float,
                                y: float) -> Optional[Annotation]:
        """
        Get annotation at a specific point on a page.

        Args:
            page: 0-based page index
            x, y: Point in unscaled document coordinates

        Returns:
            The topmost annotation at the point, or None
        """
        # Check in reverse order (topmost first)
        for annotation in reversed(self.get_annotations_for_page(page)):
            if annotation.contains_point(x, y):
                return annotation
        return None

    @property
    def has_unsaved_changes(self) -> bool:
        return tuple(self.annotations) != self._saved_state

    def mark_saved(self, snapshot: Optional[tuple] = None) -> None:
        """Remember the given (or current) list as the saved state."""
        self._saved_state = tuple(self.annotations) if snapshot is None else tuple(snapshot)

    def get_annotation_count(self) -> int:
        """Get total number of annotations."""
        return len(self.annotations)

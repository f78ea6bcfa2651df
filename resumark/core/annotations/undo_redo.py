"""
Undo/Redo history for annotations.

The history is a linear log of full snapshots with a cursor. The entry
under the cursor always mirrors the committed annotation list.
"""
from typing import List, Optional, Sequence, Tuple

from .models import Annotation

Snapshot = Tuple[Annotation, ...]


class HistoryLog:
    """Linear log of annotation-list snapshots."""

    def __init__(self, max_size: Optional[int] = None):
        """
        Initialize the log with the empty starting state.

        Args:
            max_size: Maximum number of entries to keep, None for unbounded
        """
        self.entries: List[Snapshot] = [()]
        self.index: int = 0
        self.max_size = max_size

    @property
    def current(self) -> Snapshot:
        """Snapshot under the cursor."""
        return self.entries[self.index]

    def push_state(self, annotations: Sequence[Annotation]) -> None:
        """
        Record a post-mutation snapshot.

        Any redoable entries beyond the cursor are discarded first.

        Args:
            annotations: The annotation list after the mutation
        """
        del self.entries[self.index + 1:]
        self.entries.append(tuple(annotations))
        self.index = len(self.entries) - 1

        # Limit log size, dropping the oldest entries
        if self.max_size is not None and len(self.entries) > self.max_size:
            overflow = len(self.entries) - self.max_size
            del self.entries[:overflow]
            self.index -= overflow

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.index > 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.index < len(self.entries) - 1

    def undo(self) -> Optional[Snapshot]:
        """
        Move the cursor back one entry.

        Returns:
            The snapshot now under the cursor, or None at the earliest entry
        """
        if not self.can_undo():
            return None
        self.index -= 1
        return self.current

    def redo(self) -> Optional[Snapshot]:
        """
        Move the cursor forward one entry.

        Returns:
            The snapshot now under the cursor, or None at the latest entry
        """
        if not self.can_redo():
            return None
        self.index += 1
        return self.current

    def clear(self) -> None:
        """Reset to the single empty starting entry."""
        self.entries = [()]
        self.index = 0

    def __len__(self) -> int:
        return len(self.entries)

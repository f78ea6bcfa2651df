# core/export/save_worker.py

import logging
from typing import Callable, List

from PyQt5.QtCore import QThread, pyqtSignal

from ..annotations.models import Annotation

log = logging.getLogger(__name__)


class SaveWorker(QThread):
    """Worker thread handing annotations to a persistence sink without freezing the UI."""

    # Emitted from inside run(); QThread.finished follows once the thread exits
    save_done = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message

    def __init__(self, sink: Callable[[List[Annotation]], object],
                 annotations: List[Annotation]):
        super().__init__()
        self.sink = sink
        self.annotations = annotations

    def run(self):
        """Execute the save in a background thread."""
        self.progress.emit("Saving annotations...")
        try:
            result = self.sink(self.annotations)
        except Exception as e:
            log.exception("Persistence sink raised")
            self.save_done.emit(False, f"Error during save: {e}")
            return

        if result is False:
            self.save_done.emit(False, "The annotations could not be stored.")
        else:
            self.save_done.emit(True, f"Saved {len(self.annotations)} annotations.")

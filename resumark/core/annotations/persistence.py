"""
Handles persistence of annotations to/from JSON files.
"""
import hashlib
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ...utils.resource_loader import get_app_data_dir
from .models import Annotation, annotation_from_dict

log = logging.getLogger(__name__)


class AnnotationPersistence:
    """Manages saving and loading annotations to/from disk."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self._storage_dir: Optional[Path] = storage_dir

    def get_storage_dir(self) -> Path:
        """
        Get or create the directory used for annotation files.

        Returns:
            Path to the annotations directory
        """
        if self._storage_dir is None:
            self._storage_dir = get_app_data_dir() / 'annotations'
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        return self._storage_dir

    def get_json_path(self, document: str) -> Path:
        """
        Get the JSON file path for a given document.

        Args:
            document: Path or URL of the annotated document

        Returns:
            Path to the corresponding JSON annotations file
        """
        # Hash the document path so each document gets its own file
        path_hash = hashlib.md5(document.encode()).hexdigest()
        return self.get_storage_dir() / f"{path_hash}.json"

    def save_to_json(self, annotations: Sequence[Annotation], document: str,
                     file_path: Optional[Path] = None) -> bool:
        """
        Save annotations to a JSON file.

        Args:
            annotations: Annotations to save, in order
            document: Path or URL of the annotated document
            file_path: Optional custom path for the JSON file

        Returns:
            True if save was successful, False otherwise
        """
        if file_path is None:
            file_path = self.get_json_path(document)

        data = {
            'document': document,
            'annotations': [ann.to_dict() for ann in annotations]
        }

        try:
            os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
            with open(file_path, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError:
            log.exception("Failed to save annotations to %s", file_path)
            return False

        log.info("Saved %d annotations to %s", len(data['annotations']), file_path)
        return True

    def load_from_json(self, document: str,
                       file_path: Optional[Path] = None) -> Tuple[List[Annotation], bool]:
        """
        Load annotations from a JSON file.

        Args:
            document: Path or URL of the annotated document
            file_path: Optional custom path for the JSON file

        Returns:
            Tuple of (list of annotations, success flag)
        """
        if file_path is None:
            file_path = self.get_json_path(document)

        if not os.path.exists(file_path):
            return [], False

        try:
            with open(file_path, 'r') as f:
                data = json.load(f)
            annotations = [annotation_from_dict(ann_data)
                           for ann_data in data.get('annotations', [])]
        except (OSError, ValueError, KeyError, TypeError):
            log.exception("Failed to load annotations from %s", file_path)
            return [], False

        stored_document = data.get('document')
        if stored_document != document:
            log.warning("JSON file %s is for a different document: %s",
                        file_path, stored_document)

        return annotations, True

    def has_saved_annotations(self, document: str) -> bool:
        """Check if a JSON file exists for this document."""
        return self.get_json_path(document).exists()


class JsonAnnotationSink:
    """Persistence sink writing the finalized list to a JSON file."""

    def __init__(self, document: str, persistence: Optional[AnnotationPersistence] = None,
                 file_path: Optional[Path] = None):
        self.document = document
        self.persistence = persistence or AnnotationPersistence()
        self.file_path = file_path

    def __call__(self, annotations: Sequence[Annotation]) -> bool:
        return self.persistence.save_to_json(annotations, self.document, self.file_path)

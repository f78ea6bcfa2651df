"""
Annotation model, history and persistence.
"""
from .models import (
    Annotation, AnnotationType, HighlightAnnotation, TextAnnotation,
    annotation_from_dict, color_to_hex, parse_color
)
from .manager import AnnotationManager
from .undo_redo import HistoryLog
from .persistence import AnnotationPersistence, JsonAnnotationSink

__all__ = [
    'Annotation',
    'AnnotationType',
    'HighlightAnnotation',
    'TextAnnotation',
    'annotation_from_dict',
    'color_to_hex',
    'parse_color',
    'AnnotationManager',
    'HistoryLog',
    'AnnotationPersistence',
    'JsonAnnotationSink'
]

"""
Core editing logic for Resumark.
"""
from .annotations import (
    Annotation, AnnotationManager, AnnotationType, HighlightAnnotation, TextAnnotation
)

__all__ = [
    'Annotation',
    'AnnotationManager',
    'AnnotationType',
    'HighlightAnnotation',
    'TextAnnotation'
]

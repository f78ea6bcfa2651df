"""
User interface components for Resumark.
"""
from .windows import EditorWindow

__all__ = ['EditorWindow']

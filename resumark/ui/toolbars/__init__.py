"""
Toolbar components.
"""
from .editor_toolbar import EditorToolbar
from .tool_options_bar import ToolOptionsBar

__all__ = ['EditorToolbar', 'ToolOptionsBar']

"""
Editor session state machine.
"""
from .tools import ToolMode
from .session import EditorSession, EditorState

__all__ = ['ToolMode', 'EditorSession', 'EditorState']

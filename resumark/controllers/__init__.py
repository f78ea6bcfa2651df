"""
Application controllers for managing interactions between UI and core logic.
"""
from .editor_controller import EditorController
from .input_handler import UserInputHandler

__all__ = [
    'EditorController',
    'UserInputHandler'
]

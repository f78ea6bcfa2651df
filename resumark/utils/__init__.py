"""
Utility functions and helpers.
"""
from .resource_loader import APP_NAME, get_app_data_dir
from .warning_manager import WarningManager, WarningType, warning_manager

__all__ = [
    'APP_NAME',
    'get_app_data_dir',
    'WarningManager',
    'WarningType',
    'warning_manager'
]

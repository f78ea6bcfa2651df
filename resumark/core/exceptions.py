"""
Exceptions raised by the editor core.
"""


class SaveError(Exception):
    """Raised when a persistence sink rejects or fails to store annotations."""

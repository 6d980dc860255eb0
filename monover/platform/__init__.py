"""Platform adapters: process execution and file writes."""

from .files import atomic_write_text, read_text_if_exists
from .process import ProcessError, run

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "read_text_if_exists",
    "run",
]

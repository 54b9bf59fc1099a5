"""
Utilities Module

Logging setup shared by the command-line tool and embedding applications.
"""

from aegis.utils.logging import setup_logger, setup_logging

__all__ = [
    'setup_logger',
    'setup_logging',
]

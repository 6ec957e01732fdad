"""
LogSift terminal UI
"""

from .app import LogSiftApp, run_app

__all__ = [
    'LogSiftApp',
    'run_app',
]

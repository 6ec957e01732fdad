"""
LogSift UI Views Package
"""

from .log_search import LogSearchView

__all__ = [
    'LogSearchView',
]

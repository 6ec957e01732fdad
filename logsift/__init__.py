"""
LogSift - search and statistics over directories of application log files
"""

__version__ = "0.1.0"

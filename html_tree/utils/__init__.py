"""
Utility modules for the HTML tree.
"""

from html_tree.utils.config import Config, get_config, set_config
from html_tree.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'get_config',
    'set_config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]

"""
PLAYTOOLS Commands Package.

This package contains all PLAYTOOLS CLI commands organized as separate modules
for better maintainability and modularity.
"""

from .invoke import invoke
from .logs import logs
from .menu import menu

__all__ = ["invoke", "logs", "menu"]

"""
PLAYTOOLS Shared Utility Functions.

This module contains utility functions used across multiple CLI commands
and modules to avoid circular imports.
"""

import logging
import os
import shutil
from typing import Optional

from playtools.errors import ExecutableNotFoundError

logger = logging.getLogger(__name__)


def get_app_path(exe_name: str = 'aws') -> str:
    """Find the full path to an executable in a cross-platform way.

    On Windows, prefers .cmd and .exe versions when multiple variants exist.

    Args:
        exe_name: Name of the executable to find

    Returns:
        Full path to the executable

    Raises:
        ExecutableNotFoundError: If executable is not found in PATH
        ValueError: If executable name is invalid
    """
    if not exe_name or not exe_name.strip():
        raise ValueError(f'Invalid executable name provided: {exe_name!r}')

    app_path = shutil.which(exe_name)
    if app_path is None:
        raise ExecutableNotFoundError(f'{exe_name} not found in system PATH. Please ensure it is installed and in your PATH.')

    if os.name == 'nt':
        preferred_extensions = ['.cmd', '.exe']
        for ext in preferred_extensions:
            if not exe_name.lower().endswith(ext):
                preferred_path = shutil.which(exe_name + ext)
                if preferred_path:
                    logger.debug("Found multiple %s executables, using: %s", exe_name, preferred_path)
                    return preferred_path

    logger.debug("Using executable: %s", app_path)
    return app_path


def decode_output(data: Optional[bytes]) -> str:
    """Decode captured process output without failing on stray bytes."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace").strip()


def parse_positive_int(text: str) -> Optional[int]:
    """Return ``text`` as an integer if it is a plain positive decimal, else None.

    Signs are accepted, surrounding whitespace and digit separators are not.
    """
    if not text or not text.isascii():
        return None
    digits = text[1:] if text[0] in "+-" else text
    if not digits.isdigit():
        return None
    value = int(text)
    return value if value > 0 else None

"""
Helpers for invoking external collaborator tools.
"""

import subprocess
from typing import List, Sequence

from loguru import logger

from ..core.exceptions import CommandFailedError


def run_command(program: str, args: Sequence[str] = ()) -> subprocess.CompletedProcess:
    """
    Run an external program and capture its output.
    
    The full command line and any output are logged when the program fails
    or writes to stderr, to make failed runs easier to debug.
    
    Raises:
        CommandFailedError: If the program cannot be started or exits non-zero
    """
    cmd: List[str] = [program, *[str(arg) for arg in args]]
    
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise CommandFailedError(program, stderr=str(e)) from e
    
    if result.returncode != 0 or result.stderr:
        logger.warning(f"command: {' '.join(cmd)}")
        if result.stdout:
            logger.warning(f"stdout:\n{result.stdout}")
        if result.stderr:
            logger.warning(f"stderr:\n{result.stderr}")
    
    if result.returncode != 0:
        raise CommandFailedError(program, returncode=result.returncode, stderr=result.stderr)
    
    return result

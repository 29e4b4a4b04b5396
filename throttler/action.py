"""Run the user's action command through the shell."""

from __future__ import annotations

import subprocess
import sys

from loguru import logger

from throttler.exceptions import ActionError


def run_action(command: str) -> int:
    """Run ``command`` with the host shell and wait for it to finish.

    The child inherits stdin, stdout and stderr. The command line is trusted
    input and is handed to the shell unchanged. Returns the child's exit
    status; callers only log it.

    Raises:
        ActionError: If the shell could not be started.
    """
    sys.stdout.flush()
    logger.info(f"Running action: {command}")
    try:
        result = subprocess.run(command, shell=True)
    except OSError as e:
        raise ActionError(f"Could not run action {command!r}: {e}") from e

    if result.returncode != 0:
        logger.warning(f"Action exited with status {result.returncode}")
    else:
        logger.debug("Action finished")
    return result.returncode

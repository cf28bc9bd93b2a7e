"""
Android Devices Bridge - Command Runner

Executes the adb binary synchronously and returns its raw output.
Process execution and path lookup are injected so tests can replay
scripted adb output without spawning anything.
"""

import logging
import shutil
import subprocess
from typing import Callable, List, Optional, Sequence

from ...utils.error_handler import ExecutionFailedError, ToolNotFoundError

logger = logging.getLogger(__name__)

# (cmd, merge_stderr) -> CompletedProcess with bytes stdout
Executor = Callable[[List[str], bool], subprocess.CompletedProcess]
PathLookup = Callable[[str], Optional[str]]


def subprocess_executor(cmd: List[str], merge_stderr: bool = True) -> subprocess.CompletedProcess:
    """Default executor: blocking subprocess.run, no timeout."""
    return subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
        check=False,
    )


class CommandRunner:
    """
    Runs adb with an argument vector.

    Args:
        adb_path: Executable name or path of the bridge tool
        executor: Callable that actually runs the process
        which: Callable used to resolve the executable on the search path
    """

    def __init__(
        self,
        adb_path: str = "adb",
        executor: Optional[Executor] = None,
        which: PathLookup = shutil.which,
    ):
        self.adb_path = adb_path
        self._executor = executor or subprocess_executor
        self._which = which

    def ensure_available(self) -> str:
        """
        Resolve the adb executable.

        Returns:
            Resolved path of the executable

        Raises:
            ToolNotFoundError: adb is not on the search path
        """
        resolved = self._which(self.adb_path)
        if not resolved:
            logger.error(f"[CommandRunner] {self.adb_path} not found in PATH")
            raise ToolNotFoundError(self.adb_path, f"{self.adb_path} not found in PATH")
        return resolved

    def run(self, args: Sequence[str], merge_stderr: bool = True) -> bytes:
        """
        Run adb with the given arguments.

        Args:
            args: Arguments following the adb executable
            merge_stderr: Capture stderr together with stdout

        Returns:
            Raw output bytes

        Raises:
            ExecutionFailedError: Non-zero exit or the process could not start
        """
        cmd = [self.adb_path, *args]
        logger.debug(f"[CommandRunner] Running: {' '.join(cmd)}")

        try:
            result = self._executor(cmd, merge_stderr)
        except OSError as e:
            raise ExecutionFailedError(cmd, None, reason=str(e)) from e

        output = result.stdout or b""
        if result.returncode != 0:
            # stderr is only separate when not merged; keep it for diagnostics
            if not merge_stderr and result.stderr:
                output = output + result.stderr
            raise ExecutionFailedError(cmd, result.returncode, output)

        return output

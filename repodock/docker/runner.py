# Repodock Docker Process Runner
# Blocking execution of docker and docker-compose commands

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class DockerError(Exception):
    """Exception raised for docker and compose failures."""

    def __init__(self, message: str, returncode: int = 1, output: str = ""):
        self.message = message
        self.returncode = returncode
        self.output = output
        super().__init__(message)


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a process."""

    args: tuple[str, ...]
    returncode: int
    output: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        """True if the process exited with status 0."""
        return self.returncode == 0


class CommandRunner:
    """Runs external commands, either captured or attached to the terminal."""

    def run(
        self,
        args: list[str],
        *,
        cwd: Optional[Path] = None,
        capture: bool = True,
        merge_stderr: bool = True,
    ) -> ProcessResult:
        """
        Run a command.

        Args:
            args: Command and arguments.
            cwd: Working directory.
            capture: Capture output. When False the command writes straight
                to the terminal (used for ``up``, ``logs`` and ``ps``).
            merge_stderr: Fold stderr into ``output``. When False, ``output``
                holds stdout only and stderr is kept in ``error``, for
                commands whose stdout is parsed.

        Returns:
            ProcessResult with exit status and captured output.

        Raises:
            DockerError: If the executable cannot be found.
        """
        try:
            if capture:
                result = subprocess.run(
                    args,
                    cwd=cwd,
                    check=False,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                    text=True,
                )
                return ProcessResult(
                    args=tuple(args),
                    returncode=result.returncode,
                    output=result.stdout or "",
                    error="" if merge_stderr else result.stderr or "",
                )

            result = subprocess.run(args, cwd=cwd, check=False)
            return ProcessResult(args=tuple(args), returncode=result.returncode)
        except FileNotFoundError:
            raise DockerError(f"{args[0]} command not found. Is Docker installed?", returncode=127)


_default_runner = CommandRunner()


def get_default_runner() -> CommandRunner:
    """Return the process-wide command runner."""
    return _default_runner

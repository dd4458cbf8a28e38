"""External command execution for hardware probes."""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 5.0

# Shell conventions for "could not run"
EXIT_TIMEOUT = 124
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """Runs an argv and reports exit code and output.

    Implementations must never raise: every failure to spawn or complete
    the process is reported as a non-zero CommandResult.
    """

    @abstractmethod
    def run(self, argv: Sequence[str]) -> CommandResult:
        """Run a command.

        Args:
            argv: Program and arguments. No shell is involved.

        Returns:
            CommandResult with the exit code and captured output.
        """


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by subprocess.run with a timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> CommandResult:
        argv = list(argv)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            logger.debug(f"{argv[0]} not found: {e}")
            return CommandResult(EXIT_NOT_FOUND, "", str(e))
        except subprocess.TimeoutExpired:
            logger.debug(f"{argv[0]} timed out after {self.timeout}s")
            return CommandResult(EXIT_TIMEOUT, "", f"timed out after {self.timeout}s")
        except (OSError, ValueError) as e:
            logger.debug(f"{argv[0]} could not be executed: {e}")
            return CommandResult(EXIT_CANNOT_EXECUTE, "", str(e))

        return CommandResult(result.returncode, result.stdout or "", result.stderr or "")

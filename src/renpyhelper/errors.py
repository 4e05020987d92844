"""Exception classes for running the rembg tool."""

from __future__ import annotations


class RembgError(Exception):
    """Base error for rembg invocations."""


class RembgNotInstalledError(RembgError):
    """Raised when the rembg executable cannot be found or started."""

    def __init__(self, executable: str) -> None:
        """Initialize the exception.

        Args:
            executable: Name or path of the missing executable
        """
        super().__init__(f"{executable} is not installed or not in PATH")
        self.executable = executable


class RembgProcessError(RembgError):
    """Raised when rembg exits with a non-zero status."""

    def __init__(self, returncode: int, stderr: str = "") -> None:
        """Initialize the exception.

        Args:
            returncode: Process exit status
            stderr: Captured standard error output
        """
        message = stderr.strip() or f"rembg exited with status {returncode}"
        super().__init__(f"[{returncode}] {message}")
        self.returncode = returncode
        self.stderr = stderr

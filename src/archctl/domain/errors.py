"""Error taxonomy for archctl.

Every failure a tool call can hit maps to one of these classes. The
dispatcher turns any :class:`ArchctlError` into an error ToolResult
carrying ``str(error)`` as content, so messages are written for the
person reading the tool output. It lives in the domain layer so the
infrastructure and service layers raise the same types.

Categories:
- ParameterError: missing or invalid tool argument (rejected at dispatch)
- EncodingError: constraint parameters that map to no policy entry
- ExecutionError / ExecutionTimeout: toolchain could not run to completion
- ArtifactIOError: scratch test file could not be written
- ProjectError: target project layout unusable (e.g. no go.mod)
"""

from __future__ import annotations

from typing import Any


class ArchctlError(Exception):
    """Base exception for all tool-call failures."""

    code = "ARCHCTL_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        self.message = message
        self.detail = detail or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly payload."""
        return {"code": self.code, "message": self.message, "detail": self.detail}


class ParameterError(ArchctlError):
    """A required argument is missing or outside its allowed values."""

    code = "INVALID_PARAMETER"


class EncodingError(ArchctlError):
    """A constraint was recognized but its parameters match no table entry."""

    code = "ENCODING_ERROR"


class ExecutionError(ArchctlError):
    """The toolchain process failed to start or was interrupted."""

    code = "EXECUTION_ERROR"


class ExecutionTimeout(ExecutionError):
    """The toolchain process exceeded its time limit and was killed."""

    code = "EXECUTION_TIMEOUT"

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Test run timed out after {timeout_seconds:g}s",
            detail={"timeout_seconds": timeout_seconds},
        )


class ArtifactIOError(ArchctlError):
    """The scratch verification artifact could not be written."""

    code = "ARTIFACT_IO_ERROR"


class ProjectError(ArchctlError):
    """The target project cannot be analyzed as a Go module."""

    code = "PROJECT_ERROR"

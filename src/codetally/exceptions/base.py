"""Base exception for codetally."""

from typing import Dict, Optional


class CodetallyError(Exception):
    """Base exception for all codetally errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class PreconditionError(CodetallyError):
    """Raised when the caller supplies input the scan cannot start from."""

    def __init__(self, path: object, reason: str):
        super().__init__(
            f"Invalid scan input: {path}", details={"path": str(path), "reason": reason}
        )
        self.path = path
        self.reason = reason


class InvariantViolation(CodetallyError):
    """Raised when a collaborator breaks the parser/indexer contract.

    Always fatal. It signals a bug in a parser adapter, a visitor or the
    index, never a problem with the caller's input.
    """

    def __init__(self, reason: str, **details: object):
        super().__init__(
            f"Invariant violated: {reason}",
            details={k: str(v) for k, v in details.items()},
        )
        self.reason = reason

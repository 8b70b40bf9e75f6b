# errors.py
# The three ways resolve() can fail. Collaborator exceptions are wrapped,
# never exposed as the raised type.

from __future__ import annotations


class ResolutionError(Exception):
    kind = "ResolutionError"

    def __init__(self, target: str, cause: BaseException | None = None):
        self.target = target
        self.cause = cause
        super().__init__(target, cause)

    def __str__(self) -> str:
        if self.cause is None:
            return f"{self.kind} for {self.target!r}"
        return f"{self.kind} for {self.target!r}: {self.cause}"


class LookupFailure(ResolutionError):
    """The name could not be resolved (no such host, no answer, resolver unreachable)."""

    kind = "LookupFailure"


class ParseFailure(ResolutionError):
    """A string the classifier accepted could not be turned into an address."""

    kind = "ParseFailure"


class IoFailure(ResolutionError):
    """A socket or system error during resolution."""

    kind = "IoFailure"

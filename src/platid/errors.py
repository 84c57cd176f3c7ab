"""User-facing errors with actionable context.

Errors are messages for humans. Each error should answer:
1. What went wrong?
2. What was the context?
3. What can the user do about it?

Only two kinds are raised by the resolution API: UnresolvedStateError when the
ambient signals cannot be mapped to a catalog entry, and InvalidIdentifierError
when an explicit string argument cannot.
"""

import collections.abc
import dataclasses

import beartype


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class PlatidError(Exception):
    """Base error with structured context for user-facing messages."""

    message: str
    """What went wrong."""

    hint: str | None = None
    """What the user can do about it."""

    def __str__(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class UnresolvedStateError(PlatidError):
    """Ambient signals are missing or match no catalog entry."""

    kind: str = dataclasses.field(kw_only=True)
    """What was being resolved (e.g., "architecture")."""

    signals: collections.abc.Mapping[str, str | None] = dataclasses.field(
        default_factory=dict, kw_only=True
    )
    """Signal values observed during resolution."""

    @staticmethod
    def make(
        kind: str, signals: collections.abc.Mapping[str, str | None]
    ) -> "UnresolvedStateError":
        """Create an UnresolvedStateError describing the observed signals."""
        observed = ", ".join(
            f"{key}={'<missing>' if value is None else repr(value)}"
            for key, value in signals.items()
        )
        return UnresolvedStateError(
            message=f"Unknown current {kind} ({observed})",
            hint="Pass explicit properties, or use parse() with a known value.",
            kind=kind,
            signals=dict(signals),
        )


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class InvalidIdentifierError(PlatidError):
    """An explicit identifier matches no catalog entry."""

    kind: str = dataclasses.field(kw_only=True)
    """What was being resolved (e.g., "operating system")."""

    value: str = dataclasses.field(kw_only=True)
    """The rejected input."""

    @staticmethod
    def make(
        kind: str, value: str, hint: str | None = None
    ) -> "InvalidIdentifierError":
        """Create an InvalidIdentifierError for the rejected value."""
        return InvalidIdentifierError(
            message=f"Unknown {kind}: {value!r}",
            hint=hint,
            kind=kind,
            value=value,
        )

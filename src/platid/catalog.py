"""Shared resolution for the fixed OS and architecture catalogs."""

import enum
import typing as tp

import beartype

import platid.aliases
import platid.errors
import platid.props

_FROM_STRING_HINT = (
    "Only canonical ids are accepted here; use parse() for vendor spellings."
)


class Catalog(enum.Enum):
    """Closed set of entries resolvable by canonical id, name, or alias.

    Subclasses declare their members in matching order and set ``aliases`` in
    ``__init__``. The first member that accepts an input wins, so members whose
    aliases are prefixes of another member's aliases must come later.
    """

    aliases: tuple[platid.aliases.AliasRule, ...]

    @property
    def id(self) -> str:
        """Canonical identifier, the lowercased member name (e.g., "x86_64")."""
        return self.name.lower()

    def __str__(self) -> str:
        return self.id

    @beartype.beartype
    def accepts(self, value: str) -> bool:
        """Return True if value is this entry's id, name, or one of its aliases."""
        # ids are lowercased names, so this covers both case-insensitively.
        if value.isascii() and value.lower() == self.id:
            return True
        return any(rule.matches(value) for rule in self.aliases)

    @classmethod
    def kind(cls) -> str:
        """Human readable name of what the catalog identifies."""
        raise NotImplementedError

    @classmethod
    def signal_keys(cls) -> tuple[str, ...]:
        """Ambient signals read by current(), in priority order."""
        raise NotImplementedError

    @classmethod
    def current_or_none(
        cls, props: platid.props.Properties | None = None
    ) -> tp.Self | None:
        """Resolve the entry for the ambient signals, or None."""
        raise NotImplementedError

    @classmethod
    def current(cls, props: platid.props.Properties | None = None) -> tp.Self:
        """Resolve the entry for the ambient signals.

        Raises UnresolvedStateError if the signals are missing or unknown.
        """
        props = platid.props.get_properties(props)
        entry = cls.current_or_none(props)
        if entry is None:
            signals = platid.props.snapshot(props, cls.signal_keys())
            raise platid.errors.UnresolvedStateError.make(cls.kind(), signals)
        return entry

    @classmethod
    def from_string_or_none(cls, value: str) -> tp.Self | None:
        """Return the entry whose canonical id is exactly value, or None."""
        for entry in cls:
            if entry.id == value:
                return entry
        return None

    @classmethod
    def from_string(cls, value: str) -> tp.Self:
        """Return the entry whose canonical id is exactly value.

        Strict and case-sensitive; meant for round-tripping ids produced by this
        library. Raises InvalidIdentifierError otherwise.
        """
        entry = cls.from_string_or_none(value)
        if entry is None:
            raise platid.errors.InvalidIdentifierError.make(
                cls.kind(), value, hint=_FROM_STRING_HINT
            )
        return entry

    @classmethod
    def parse_or_none(cls, value: str) -> tp.Self | None:
        """Return the first entry accepting value as id, name, or alias, or None."""
        if not value:
            return None
        for entry in cls:
            if entry.accepts(value):
                return entry
        return None

    @classmethod
    def parse(cls, value: str) -> tp.Self:
        """Return the first entry accepting value as id, name, or alias.

        Raises InvalidIdentifierError if nothing matches.
        """
        entry = cls.parse_or_none(value)
        if entry is None:
            raise platid.errors.InvalidIdentifierError.make(cls.kind(), value)
        return entry

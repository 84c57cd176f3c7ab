"""Platform identity: one operating system plus one architecture."""

import collections.abc
import dataclasses
import typing as tp

import beartype

import platid.arch
import platid.errors
import platid.props
import platid.system

_KIND = "platform"


@beartype.beartype
@dataclasses.dataclass(frozen=True, order=True)
class Platform:
    """Combination of an operating system and an architecture.

    Equality, hashing and ordering only look at id, so two platforms with the
    same id are interchangeable no matter how they were built. The id is also
    the persisted form: str() returns it, from_string() reads it back, and
    pickling stores nothing else.
    """

    os: platid.system.Os = dataclasses.field(compare=False)
    arch: platid.arch.Arch = dataclasses.field(compare=False)
    id: str = dataclasses.field(init=False)
    """Canonical identifier, "<os-id>-<arch-id>" (e.g., "linux-x86_64")."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", f"{self.os.id}-{self.arch.id}")

    def __str__(self) -> str:
        return self.id

    def __reduce__(self) -> tuple[tp.Any, ...]:
        return (Platform.from_string, (self.id,))

    @classmethod
    def current_or_none(
        cls, props: platid.props.Properties | None = None
    ) -> tp.Self | None:
        """Resolve the platform of the running process, or None.

        Both halves must resolve; a known OS with an unknown architecture (or the
        other way around) is no platform at all.
        """
        props = platid.props.get_properties(props)
        os = platid.system.Os.current_or_none(props)
        arch = platid.arch.Arch.current_or_none(props)
        if os is None or arch is None:
            return None
        return cls(os, arch)

    @classmethod
    def current(cls, props: platid.props.Properties | None = None) -> tp.Self:
        """Resolve the platform of the running process.

        Raises UnresolvedStateError if either the OS or the architecture is unknown.
        """
        props = platid.props.get_properties(props)
        platform = cls.current_or_none(props)
        if platform is None:
            keys = (*platid.system.Os.signal_keys(), *platid.arch.Arch.signal_keys())
            signals = platid.props.snapshot(props, keys)
            raise platid.errors.UnresolvedStateError.make(_KIND, signals)
        return platform

    @classmethod
    def from_string_or_none(cls, value: str) -> tp.Self | None:
        """Return the platform whose canonical id is exactly value, or None."""
        return _split(
            value,
            platid.system.Os.from_string_or_none,
            platid.arch.Arch.from_string_or_none,
        )

    @classmethod
    def from_string(cls, value: str) -> tp.Self:
        """Return the platform whose canonical id is exactly value.

        Raises InvalidIdentifierError otherwise; use parse() for vendor spellings.
        """
        platform = cls.from_string_or_none(value)
        if platform is None:
            raise platid.errors.InvalidIdentifierError.make(
                _KIND, value, hint="Expected '<os-id>-<arch-id>', e.g. 'linux-x86_64'."
            )
        return platform

    @classmethod
    def parse_or_none(cls, value: str) -> tp.Self | None:
        """Parse "<os>-<arch>" where each half may be an id, name, or alias, or None."""
        return _split(
            value, platid.system.Os.parse_or_none, platid.arch.Arch.parse_or_none
        )

    @classmethod
    def parse(cls, value: str) -> tp.Self:
        """Parse "<os>-<arch>" where each half may be an id, name, or alias.

        Raises InvalidIdentifierError if no split resolves, or several do.
        """
        platform = cls.parse_or_none(value)
        if platform is None:
            raise platid.errors.InvalidIdentifierError.make(_KIND, value)
        return platform


@beartype.beartype
def _split(
    value: str,
    resolve_os: collections.abc.Callable[[str], platid.system.Os | None],
    resolve_arch: collections.abc.Callable[[str], platid.arch.Arch | None],
) -> Platform | None:
    """Try every dash as the OS/arch separator; succeed only if exactly one works."""
    found: set[Platform] = set()
    start = value.find("-")
    while start != -1:
        os_part, arch_part = value[:start], value[start + 1 :]
        if os_part and arch_part:
            os = resolve_os(os_part)
            arch = resolve_arch(arch_part) if os is not None else None
            if os is not None and arch is not None:
                found.add(Platform(os, arch))
        start = value.find("-", start + 1)

    if len(found) != 1:
        return None
    return found.pop()

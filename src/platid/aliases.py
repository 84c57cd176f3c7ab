"""Garbage-tolerant alias patterns.

Vendor strings are rarely clean: "garbage.ARM64" or "ARM 64-garbage" must still
resolve to ARM_64. An alias pattern is a case-insensitive regular expression in
which " ?" stands for an optional separator. The compiled rule accepts the
pattern on its own, or with a single separator-delimited token before and/or
after it. Anything noisier is rejected.
"""

import dataclasses
import re

import beartype

SEPARATORS = " ._-"
"""Characters that may join an alias to its neighbouring tokens."""

_SEP = "[ ._-]"
_TOKEN = "[a-z0-9]+"


@beartype.beartype
def compile_alias(pattern: str) -> re.Pattern[str]:
    """Compile an alias pattern into a whole-string, garbage-tolerant regex."""
    body = pattern.replace(" ?", f"{_SEP}?")
    return re.compile(
        f"(?:{_TOKEN}{_SEP})?(?:{body})(?:{_SEP}{_TOKEN})?",
        re.IGNORECASE | re.ASCII,
    )


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class AliasRule:
    """One recognized vendor spelling of a catalog entry."""

    pattern: str
    """Source pattern; " ?" marks an optional separator."""

    regex: re.Pattern[str] = dataclasses.field(init=False, repr=False, compare=False)
    """Compiled form of pattern."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", compile_alias(self.pattern))

    def matches(self, value: str) -> bool:
        """Return True if value is this alias, give or take one token per side."""
        return self.regex.fullmatch(value) is not None

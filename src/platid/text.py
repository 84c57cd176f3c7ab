"""String canonicalization primitives shared by the catalogs."""

import beartype


@beartype.beartype
def to_id(chars: str) -> str:
    """Transform UPPER_SNAKE_CASE into lower-dash-case.

    Only ASCII letters are lowered and only underscores become dashes; every
    other character is kept as is. Raises IndexError if chars is empty.
    """
    if not chars:
        raise IndexError("cannot build an id from an empty string")
    return "".join(
        "-" if c == "_" else chr(ord(c) + 32) if "A" <= c <= "Z" else c
        for c in chars
    )


@beartype.beartype
def normalize(chars: str, strip: bool = False) -> str:
    """Lowercase ASCII letters and replace everything not ASCII alphanumeric.

    Replaced characters become dashes, or are dropped when strip is set.
    """
    out = []
    for c in chars:
        if "0" <= c <= "9" or "a" <= c <= "z":
            out.append(c)
        elif "A" <= c <= "Z":
            out.append(chr(ord(c) + 32))
        elif not strip:
            out.append("-")
    return "".join(out)

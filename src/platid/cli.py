"""CLI definition using tyro."""

import dataclasses
import logging
import sys

import beartype
import tyro

import platid.errors
import platid.libc
import platid.platform


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class Current:
    """Print the platform of this machine."""

    verbose: bool = False
    """Also print OS, architecture, bitness and byte order."""


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class Parse:
    """Print the canonical id of an "<os>-<arch>" string."""

    value: tyro.conf.Positional[str]
    """Platform string, e.g. "Mac OS X-AMD64"."""

    strict: bool = False
    """Only accept canonical ids such as "linux-x86_64"."""


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class Libc:
    """Print the C library of this machine and whether it is musl."""

    ldd: str = platid.libc.DEFAULT_LDD
    """ldd executable to run."""

    timeout_s: float = platid.libc.DEFAULT_TIMEOUT_S
    """Seconds to wait for ldd before killing it."""

    verbose: bool = False
    """Log what the ldd check does."""


@beartype.beartype
def run_current(cmd: Current) -> None:
    """Run the current command."""
    platform = platid.platform.Platform.current()
    print(platform.id)
    if not cmd.verbose:
        return

    arch = platform.arch
    print(f"  os: {platform.os.id}")
    print(f"  arch: {arch.id}")
    print(f"  bitness: {arch.bitness}")
    print(f"  byteorder: {arch.byteorder}")


@beartype.beartype
def run_parse(cmd: Parse) -> None:
    """Run the parse command."""
    if cmd.strict:
        platform = platid.platform.Platform.from_string(cmd.value)
    else:
        platform = platid.platform.Platform.parse(cmd.value)
    print(platform.id)


@beartype.beartype
def run_libc(cmd: Libc) -> None:
    """Run the libc command."""
    libc = platid.libc.Libc.current(ldd=cmd.ldd, timeout_s=cmd.timeout_s)
    musl = platid.libc.has_musl(cmd.ldd, timeout_s=cmd.timeout_s)
    print(libc.id)
    print(f"  musl: {'yes' if musl else 'no'}")


@beartype.beartype
def main() -> None:
    """Main entry point."""
    command = tyro.cli(Current | Parse | Libc)  # type: ignore[arg-type]
    _configure_logging(getattr(command, "verbose", False))

    try:
        match command:
            case Current() as cmd:
                run_current(cmd)
            case Parse() as cmd:
                run_parse(cmd)
            case Libc() as cmd:
                run_libc(cmd)
    except platid.errors.PlatidError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)


@beartype.beartype
def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

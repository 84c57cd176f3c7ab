"""C standard library detection.

The only reliable way to tell musl from glibc on Linux is to ask the dynamic
loader. `ldd --version` prints a banner naming the libc (glibc's ldd) or fails
with a message from the musl loader itself, so both outputs are scanned for
"musl". The ldd run is a child process we do not control: it is bounded by a
timeout, can be cancelled from another thread, and its whole process tree is
killed before we return.
"""

import enum
import logging
import os
import re
import signal
import subprocess
import sys
import threading
import time

import beartype
import psutil

import platid.system
import platid.text

logger = logging.getLogger(__name__)

DEFAULT_LDD = "ldd"
"""Executable run by has_musl() and Libc.current()."""

DEFAULT_TIMEOUT_S = 1.0
"""How long ldd may run before its process tree is killed."""

_POLL_INTERVAL_S = 0.05
_REAP_TIMEOUT_S = 0.5


@beartype.beartype
def has_musl(
    ldd: str = DEFAULT_LDD,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    cancel: threading.Event | None = None,
) -> bool:
    """Return True if `ldd --version` mentions musl.

    Never raises for a missing or invalid executable, a timeout, or a set cancel
    event; all of those mean False. A KeyboardInterrupt while waiting still
    kills ldd before propagating.

    Args:
        ldd: Path or name of the ldd executable.
        timeout_s: Upper bound on how long to wait for output.
        cancel: Stops the check early when set (from any thread). It is left set.
    """
    output = _run_ldd(ldd, timeout_s, cancel)
    return output is not None and "musl" in output


@beartype.beartype
def _run_ldd(ldd: str, timeout_s: float, cancel: threading.Event | None) -> str | None:
    """Run `ldd --version`; return its merged output, or None if it did not finish."""
    if cancel is not None and cancel.is_set():
        logger.debug("Cancelled before spawning '%s'.", ldd)
        return None

    try:
        proc = subprocess.Popen(
            [ldd, "--version"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            start_new_session=True,
        )
    except (OSError, ValueError, subprocess.SubprocessError) as err:
        logger.debug("Failed to spawn '%s': %s", ldd, err)
        return None

    deadline = time.monotonic() + timeout_s
    # Descendants seen while the child was alive; they are reparented once it exits.
    tree: set[psutil.Process] = set()
    finished = False
    try:
        while True:
            if cancel is not None and cancel.is_set():
                logger.debug("Cancelled while waiting for '%s'.", ldd)
                return None
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug("'%s --version' timed out after %.2fs.", ldd, timeout_s)
                return None
            try:
                output, _ = proc.communicate(timeout=min(remaining, _POLL_INTERVAL_S))
            except subprocess.TimeoutExpired:
                tree.update(_descendants(proc.pid))
                continue
            finished = True
            return output
    finally:
        if not finished:
            _kill_tree(proc, tree)


@beartype.beartype
def _descendants(pid: int) -> list[psutil.Process]:
    try:
        return psutil.Process(pid).children(recursive=True)
    except psutil.Error:
        return []


@beartype.beartype
def _kill_tree(proc: subprocess.Popen, tree: set[psutil.Process]) -> None:
    """Kill proc and every descendant, then reap what we can and close the pipes.

    The child leads its own session, so on POSIX its process group also reaches
    descendants that were reparented after the child exited.
    """
    reap_deadline = time.monotonic() + _REAP_TIMEOUT_S
    if proc.poll() is None:
        tree.update(_descendants(proc.pid))
        proc.kill()
    if sys.platform != "win32":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except OSError:
            pass

    for child in tree:
        try:
            child.kill()
        except psutil.Error:
            pass
    _, alive = psutil.wait_procs(
        list(tree), timeout=max(reap_deadline - time.monotonic(), 0.0)
    )
    logger.debug(
        "Killed pid %d and %d descendant(s), %d still alive.",
        proc.pid,
        len(tree),
        len(alive),
    )

    try:
        proc.communicate(timeout=max(reap_deadline - time.monotonic(), 0.0))
    except subprocess.TimeoutExpired:
        logger.debug("Pid %d did not exit after kill.", proc.pid)
        if proc.stdout is not None:
            proc.stdout.close()


class Libc(enum.Enum):
    """C standard library flavor."""

    UNKNOWN = enum.auto()
    BIONIC = enum.auto()
    BSDLIBC = enum.auto()
    DIETLIBC = enum.auto()
    GLIBC = enum.auto()
    KLIBC = enum.auto()
    MSVC = enum.auto()
    MUSL = enum.auto()
    NEWLIB = enum.auto()
    UCLIBC = enum.auto()

    @property
    def id(self) -> str:
        return platid.text.to_id(self.name)

    def __str__(self) -> str:
        return self.id

    @classmethod
    def parse(cls, value: str) -> "Libc":
        """Guess the libc from free text such as an `ldd --version` banner.

        Never raises; anything unrecognized is UNKNOWN.
        """
        normalized = platid.text.normalize(value)
        for libc in cls:
            if libc is not cls.UNKNOWN and libc.id in normalized:
                return libc
        for pattern, libc in _HEURISTICS:
            if pattern.search(normalized):
                return libc
        return cls.UNKNOWN

    @classmethod
    def current(
        cls,
        os: platid.system.Os | None = None,
        ldd: str = DEFAULT_LDD,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        cancel: threading.Event | None = None,
    ) -> "Libc":
        """Return the libc of os (the current OS by default).

        Android, Darwin, the BSDs and Windows each ship one libc. Other systems
        are checked with `ldd --version`, under the same bounds as has_musl().
        """
        if os is None:
            os = platid.system.Os.current_or_none()
        if os is None:
            return cls.UNKNOWN

        fixed = _FIXED.get(os)
        if fixed is not None:
            return fixed

        output = _run_ldd(ldd, timeout_s, cancel)
        if not output:
            return cls.UNKNOWN
        return cls.parse(output.splitlines()[0])


_FIXED = {
    platid.system.Os.ANDROID: Libc.BIONIC,
    platid.system.Os.DARWIN: Libc.BSDLIBC,
    platid.system.Os.DRAGONFLYBSD: Libc.BSDLIBC,
    platid.system.Os.FREEBSD: Libc.BSDLIBC,
    platid.system.Os.NETBSD: Libc.BSDLIBC,
    platid.system.Os.OPENBSD: Libc.BSDLIBC,
    platid.system.Os.WINDOWS: Libc.MSVC,
}

_HEURISTICS = (
    (re.compile(r"g(cc|nu)"), Libc.GLIBC),
    (re.compile(r"apple|bsd|darwin|mac|osx|ios|dragonfly"), Libc.BSDLIBC),
    (re.compile(r"crtdll|ucrt|vcruntime|vs|win"), Libc.MSVC),
    (re.compile(r"android"), Libc.BIONIC),
)

"""Ambient platform signals.

Resolution never reads process-wide state directly. It asks a Properties object
for a handful of well-known keys, so tests (and callers that want to resolve a
remote machine) can pass a plain dict instead.
"""

import collections.abc
import os
import platform
import sys
import typing as tp

import beartype

OS_ARCH = "os.arch"
"""CPU architecture name as reported by the runtime (e.g., "x86_64", "AMD64")."""

OS_NAME = "os.name"
"""Operating system name as reported by the runtime (e.g., "Linux", "Darwin")."""

FILE_SEPARATOR = "file.separator"
"""Path separator of the running system ("/" or "\\")."""

VM_NAME = "vm.name"
"""Runtime/VM name; only used to tell Android apart from Linux."""

KEYS = (OS_ARCH, OS_NAME, FILE_SEPARATOR, VM_NAME)


@tp.runtime_checkable
class Properties(tp.Protocol):
    """Read-only accessor for ambient signals. Any Mapping[str, str] qualifies."""

    def get(self, key: str, /) -> str | None: ...


class SystemProperties:
    """Signals of the running interpreter, re-read on every lookup."""

    @beartype.beartype
    def get(self, key: str, /) -> str | None:
        match key:
            case "os.arch":
                value = platform.machine()
            case "os.name":
                value = platform.system()
            case "file.separator":
                value = os.sep
            case "vm.name":
                value = _get_vm_name()
            case _:
                return None
        return value or None

    def __repr__(self) -> str:
        return "SystemProperties()"


@beartype.beartype
def get_properties(props: Properties | None = None) -> Properties:
    """Return props, or the live system properties when props is None."""
    if props is None:
        return SystemProperties()
    return props


@beartype.beartype
def snapshot(
    props: Properties, keys: collections.abc.Iterable[str]
) -> dict[str, str | None]:
    """Read keys from props for error reporting. Not atomic across keys."""
    return {key: props.get(key) for key in keys}


@beartype.beartype
def _get_vm_name() -> str:
    """Return "Dalvik" on Android builds of CPython, else the implementation name."""
    if hasattr(sys, "getandroidapilevel"):
        return "Dalvik"
    return platform.python_implementation()

"""Tests for system module."""

import pathlib

import hypothesis
import hypothesis.strategies as st
import pytest

import platid.errors
import platid.system
from platid.system import Os


def _aliases(*patterns: str) -> st.SearchStrategy[str]:
    """Strings matching a pattern, with an optional garbage token on either side."""
    return st.one_of(*(
        st.from_regex(
            f"(garbage[ ._-])?(?:{p.replace(' ?', '[ ._-]?')})([ ._-]garbage)?",
            fullmatch=True,
        )
        for p in patterns
    ))


ALIASES = [
    (Os.AIX, ("AIX",)),
    (Os.ANDROID, ("Android",)),
    (Os.DARWIN, ("(Apple|Darwin|iOS)", "Mac( ?OS( ?X)?)?")),
    (Os.DRAGONFLYBSD, ("DragonFly( ?BSD)?",)),
    (Os.FREEBSD, ("Free ?BSD",)),
    (Os.FUCHSIA, ("Fuchsia",)),
    (Os.HAIKU, ("Haiku",)),
    (Os.HPUX, ("HP ?UX",)),
    (Os.IBMI, ("IBM ?i", "OS ?400")),
    (Os.ILLUMOS, ("Illum( ?OS)?",)),
    (Os.LINUX, ("linux", "u?nix")),
    (Os.NETBSD, ("Net ?BSD",)),
    (Os.OPENBSD, ("Open ?BSD",)),
    (Os.PLAN9, ("Plan ?9",)),
    (Os.QNX, ("QNX", "procnto")),
    (Os.REDOX, ("Redox",)),
    (Os.SOLARIS, ("Solaris", "Sun ?OS")),
    (Os.VXWORKS, ("VxWorks",)),
    (Os.WINDOWS, ("W(in(dows)?)?(7|8|10|32|64|XP)",)),
    (Os.ZOS, ("z/?OS",)),
]


def test_alias_table_covers_every_member() -> None:
    """Every operating system has alias tests."""
    assert {os for os, _ in ALIASES} == set(Os)


@pytest.mark.parametrize("os, patterns", ALIASES, ids=[os.name for os, _ in ALIASES])
@hypothesis.given(data=st.data())
def test_aliases(os: Os, patterns: tuple[str, ...], data: st.DataObject) -> None:
    """Vendor spellings resolve through parse() and current()."""
    alias = data.draw(_aliases(*patterns))
    assert Os.parse(alias) is os
    assert Os.current({"os.name": alias}) is os
    if alias == os.id:
        assert Os.from_string(alias) is os
    else:
        assert Os.from_string_or_none(alias) is None


@pytest.mark.parametrize("os", list(Os), ids=lambda os: os.name)
def test_ids(os: Os) -> None:
    """Canonical ids resolve through every entry point."""
    assert Os.current({"os.name": os.id}) is os
    assert Os.from_string(os.id) is os
    assert Os.parse(os.id) is os
    assert str(os) == os.id


@pytest.mark.parametrize("os", list(Os), ids=lambda os: os.name)
def test_names(os: Os) -> None:
    """Member names parse but are not canonical ids."""
    assert Os.current({"os.name": os.name}) is os
    assert Os.parse(os.name) is os
    with pytest.raises(platid.errors.InvalidIdentifierError):
        Os.from_string(os.name)


@pytest.mark.parametrize("value", ["", "os4000", "Roaix", "rv32imac", "rv64imac"])
def test_unknown(value: str) -> None:
    """Unknown values fail every entry point."""
    with pytest.raises(platid.errors.UnresolvedStateError):
        Os.current({"os.name": value})
    with pytest.raises(platid.errors.InvalidIdentifierError):
        Os.from_string(value)
    with pytest.raises(platid.errors.InvalidIdentifierError):
        Os.parse(value)
    assert Os.current_or_none({"os.name": value}) is None
    assert Os.parse_or_none(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Linux", Os.LINUX),
        ("Darwin", Os.DARWIN),
        ("Windows", Os.WINDOWS),
        ("Windows 11", Os.WINDOWS),
        ("Windows Server", Os.WINDOWS),
        ("FreeBSD", Os.FREEBSD),
        ("SunOS", Os.SOLARIS),
        ("OS/390", Os.ZOS),
        ("OS400", Os.IBMI),
        ("iPadOS", Os.DARWIN),
        ("Mac OS X", Os.DARWIN),
    ],
)
def test_common_system_values(value: str, expected: Os) -> None:
    """Values reported by platform.system() on common systems resolve."""
    assert Os.parse(value) is expected


def test_current_without_signals() -> None:
    """current raises with the observed signals when os.name is missing."""
    with pytest.raises(platid.errors.UnresolvedStateError) as exc_info:
        Os.current({})
    assert exc_info.value.kind == "operating system"
    assert exc_info.value.signals == {
        "file.separator": None,
        "vm.name": None,
        "os.name": None,
    }


def test_current_of_this_machine_is_known() -> None:
    """The interpreter running the tests has a known operating system."""
    assert Os.current_or_none() is not None


def test_backslash_separator_means_windows() -> None:
    """A backslash file separator wins over everything else."""
    assert Os.current({"file.separator": "\\"}) is Os.WINDOWS
    assert Os.current({"file.separator": "\\", "os.name": "Linux"}) is Os.WINDOWS


def test_slash_separator_is_not_windows() -> None:
    """A slash file separator falls through to os.name."""
    assert Os.current({"file.separator": "/", "os.name": "linux"}) is Os.LINUX


def test_dalvik_linux_is_android() -> None:
    """Linux on a Dalvik VM is Android."""
    props = {"os.name": "Linux", "vm.name": "Dalvik"}
    assert Os.current(props) is Os.ANDROID


def test_non_dalvik_windows_is_not_android() -> None:
    """The Android rule only applies to Linux with a Dalvik VM."""
    assert Os.current({"os.name": "Windows", "vm.name": "HotSpot"}) is Os.WINDOWS
    assert Os.current({"os.name": "Linux", "vm.name": "CPython"}) is Os.LINUX


def test_extensions_windows() -> None:
    """Windows uses .exe, .lib, .dll and .lib."""
    assert Os.WINDOWS.executable_extension == ".exe"
    assert Os.WINDOWS.static_library_extension == ".lib"
    assert Os.WINDOWS.shared_library_extension == ".dll"
    assert Os.WINDOWS.link_library_extension == ".lib"


def test_extensions_darwin() -> None:
    """Darwin only differs from the default in its shared libraries."""
    assert Os.DARWIN.executable_extension == ""
    assert Os.DARWIN.static_library_extension == ".a"
    assert Os.DARWIN.shared_library_extension == ".dylib"
    assert Os.DARWIN.link_library_extension == ".so"


@pytest.mark.parametrize(
    "os", [os for os in Os if os not in (Os.DARWIN, Os.WINDOWS)], ids=str
)
def test_extensions_default(os: Os) -> None:
    """All other systems use the Unix defaults."""
    assert os.file_naming == platid.system.FileNaming(
        executable="", static_library=".a", shared_library=".so", link_library=".so"
    )


@pytest.mark.parametrize("os", list(Os), ids=str)
def test_with_extension_str_and_path(os: Os) -> None:
    """with_*_extension appends to strings and paths alike."""
    cases = [
        (os.executable_extension, os.with_executable_extension),
        (os.static_library_extension, os.with_static_library_extension),
        (os.shared_library_extension, os.with_shared_library_extension),
        (os.link_library_extension, os.with_link_library_extension),
    ]
    for ext, with_ext in cases:
        assert with_ext("some/path") == f"some/path{ext}"
        assert with_ext(pathlib.Path("some/path")) == pathlib.Path(f"some/path{ext}")


def test_with_extension_keeps_type() -> None:
    """with_extension returns the type it was given."""
    path = platid.system.with_extension(pathlib.PurePosixPath("lib/foo"), ".so")
    assert path == pathlib.PurePosixPath("lib/foo.so")
    assert isinstance(path, pathlib.PurePosixPath)
    assert platid.system.with_extension("foo", "") == "foo"

"""Operating system catalog and file naming conventions."""

import dataclasses
import pathlib
import types
import typing as tp

import beartype

import platid.aliases
import platid.catalog
import platid.props
import platid.text

PathT = tp.TypeVar("PathT", str, pathlib.PurePath)


@beartype.beartype
@dataclasses.dataclass(frozen=True)
class FileNaming:
    """File extensions an operating system uses for build artifacts."""

    executable: str
    """Extension of executables, empty if there is none."""

    static_library: str
    """Extension of static libraries (archives)."""

    shared_library: str
    """Extension of shared libraries loaded at runtime."""

    link_library: str
    """Extension of the library passed to the linker (import library on Windows)."""


class Os(platid.catalog.Catalog):
    """Operating system."""

    AIX = (r"AIX",)
    ANDROID = (r"Android",)
    DARWIN = (
        r"(Apple|Darwin|iOS|iPadOS|tvOS|watchOS|visionOS)",
        r"Mac( ?OS( ?X)?)?",
        r"OS ?X",
    )
    DRAGONFLYBSD = (r"DragonFly( ?BSD)?",)
    FREEBSD = (r"Free ?BSD",)
    FUCHSIA = (r"Fuchsia",)
    HAIKU = (r"Haiku",)
    HPUX = (r"HP ?UX",)
    IBMI = (r"IBM ?i", r"OS ?400")
    ILLUMOS = (r"Illum( ?OS)?",)
    LINUX = (r"linux", r"u?nix")
    NETBSD = (r"Net ?BSD",)
    OPENBSD = (r"Open ?BSD",)
    PLAN9 = (r"Plan ?9",)
    QNX = (r"QNX", r"procnto")
    REDOX = (r"Redox",)
    SOLARIS = (r"Solaris", r"Sun ?OS")
    VXWORKS = (r"VxWorks",)
    WINDOWS = (
        r"W(in(dows)?)?(7|8|1[01]|32|64|XP)",
        r"Win(dows)?( ?(NT|Server|Vista|ME|CE))?",
    )
    ZOS = (r"z/?OS", r"OS/?390")

    def __init__(self, *patterns: str) -> None:
        self.aliases = tuple(platid.aliases.AliasRule(pattern) for pattern in patterns)

    @classmethod
    def kind(cls) -> str:
        return "operating system"

    @classmethod
    def signal_keys(cls) -> tuple[str, ...]:
        return (
            platid.props.FILE_SEPARATOR,
            platid.props.VM_NAME,
            platid.props.OS_NAME,
        )

    @classmethod
    def current_or_none(
        cls, props: platid.props.Properties | None = None
    ) -> "Os | None":
        """Resolve the operating system from the ambient signals, or None.

        A backslash file separator always means Windows. Android reports itself
        as Linux, so a Dalvik VM name turns Linux into Android. Everything else is
        parsed from the os.name signal.
        """
        props = platid.props.get_properties(props)
        if props.get(platid.props.FILE_SEPARATOR) == "\\":
            return cls.WINDOWS

        name = props.get(platid.props.OS_NAME)
        if name is None:
            return None

        vm_name = props.get(platid.props.VM_NAME) or ""
        if (
            platid.text.normalize(name, strip=True) == "linux"
            and platid.text.normalize(vm_name, strip=True) == "dalvik"
        ):
            return cls.ANDROID

        return cls.parse_or_none(name)

    @property
    def file_naming(self) -> FileNaming:
        return _FILE_NAMING.get(self, _DEFAULT_FILE_NAMING)

    @property
    def executable_extension(self) -> str:
        return self.file_naming.executable

    @property
    def static_library_extension(self) -> str:
        return self.file_naming.static_library

    @property
    def shared_library_extension(self) -> str:
        return self.file_naming.shared_library

    @property
    def link_library_extension(self) -> str:
        return self.file_naming.link_library

    def with_executable_extension(self, path: PathT) -> PathT:
        """Append the executable extension (e.g., "bin/tool" -> "bin/tool.exe")."""
        return with_extension(path, self.executable_extension)

    def with_static_library_extension(self, path: PathT) -> PathT:
        return with_extension(path, self.static_library_extension)

    def with_shared_library_extension(self, path: PathT) -> PathT:
        return with_extension(path, self.shared_library_extension)

    def with_link_library_extension(self, path: PathT) -> PathT:
        return with_extension(path, self.link_library_extension)


_DEFAULT_FILE_NAMING = FileNaming(
    executable="", static_library=".a", shared_library=".so", link_library=".so"
)

_FILE_NAMING: tp.Mapping[Os, FileNaming] = types.MappingProxyType({
    Os.DARWIN: FileNaming(
        executable="",
        static_library=".a",
        shared_library=".dylib",
        link_library=".so",
    ),
    Os.WINDOWS: FileNaming(
        executable=".exe",
        static_library=".lib",
        shared_library=".dll",
        link_library=".lib",
    ),
})


@beartype.beartype
def with_extension(path: PathT, extension: str) -> PathT:
    """Append extension to the final component of path, keeping its type."""
    if not extension:
        return path
    if isinstance(path, pathlib.PurePath):
        return path.with_name(path.name + extension)
    return path + extension

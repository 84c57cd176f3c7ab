"""CPU architecture catalog."""

import types
import typing as tp

import platid.aliases
import platid.catalog
import platid.props
import platid.text

Family = tp.Literal[
    "alpha",
    "arm",
    "itanium",
    "m68k",
    "mips",
    "ppc",
    "riscv",
    "s390",
    "sparc",
    "superh",
    "x86",
]
ByteOrder = tp.Literal["little", "big"]


class Arch(platid.catalog.Catalog):
    """CPU architecture with bitness and byte order.

    The value reported for the running process is the one of the interpreter,
    which is not necessarily the native architecture of the machine: a 32-bit
    Python on a 64-bit system resolves to the 32-bit variant, and that is the
    variant any native library loaded into the process must match.

    Members are declared in matching order. Big endian and 64-bit variants come
    before the variants whose aliases are their prefixes ("ARM 64" would
    otherwise be read as "ARM" plus a trailing garbage token).
    """

    # (family, bitness, byte order, *alias patterns)
    ALPHA_64 = ("alpha", 64, "little", r"(DEC)?Alpha(64)?")
    ARM_64_BE = (
        "arm",
        64,
        "big",
        r"AARCH( ?64)? ?(BE|EB)",
        r"AARCH ?(BE|EB) ?64",
        r"ARM ?64 ?(BE|EB)",
        r"ARM ?(BE|EB) ?64",
    )
    ARM_32_BE = ("arm", 32, "big", r"ARM( ?32)? ?(BE|EB)", r"ARM ?(BE|EB) ?32")
    ARM_64 = ("arm", 64, "little", r"A(ARCH|RM) ?(64|v(8(\.2(-A))?|9|[1-9][01]))")
    ARM_32 = (
        "arm",
        32,
        "little",
        r"ARM( ?32| ?v([1-3]|4T?|5(TE)?|6(-M)?|7(-A|E(-M)?|-R)?)(h?l)?)?",
        r"ARM(v8l|hf|el)",
    )
    ITANIUM_32 = ("itanium", 32, "little", r"I(A-?64(n| ?32)|tanium ?32)")
    ITANIUM_64 = ("itanium", 64, "little", r"I(A ?64|tanium( ?64)?)")
    M68K_32 = ("m68k", 32, "big", r"M68(k|000)")
    MIPS_64_LE = ("mips", 64, "little", r"MIPS ?64 ?(LE|EL)", r"MIPS ?(EL|LE) ?64")
    MIPS_32_LE = ("mips", 32, "little", r"MIPS( ?32)? ?(LE|EL)", r"MIPS ?(LE|EL)32")
    MIPS_64 = ("mips", 64, "big", r"MIPS ?64")
    MIPS_32 = ("mips", 32, "big", r"MIPS( ?32)?")
    PPC_64_LE = (
        "ppc",
        64,
        "little",
        r"P(ower( ?(PC|RS))?|PC) ?64 ?(LE|EL)",
        r"P(ower( ?(PC|RS))?|PC) ?(LE|EL) ?64",
    )
    PPC_32_LE = (
        "ppc",
        32,
        "little",
        r"P(ower( ?(PC|RS))?|PC)( ?32) ?(LE|EL)",
        r"P(ower( ?(PC|RS))?|PC) ?(LE|EL)(32)?",
    )
    PPC_64 = ("ppc", 64, "big", r"P(ower( ?(PC|RS))?|PC) ?64")
    PPC_32 = ("ppc", 32, "big", r"P(ower( ?(PC|RS))?|PC)(32)?")
    RISCV_64 = ("riscv", 64, "little", r"RISC ?V ?64")
    RISCV_32 = ("riscv", 32, "little", r"RISC ?V( ?32)?")
    S390_64 = ("s390", 64, "big", r"s390(x(64)?| ?64)", r"IBM ?Z ?64")
    S390_32 = ("s390", 32, "big", r"s390( ?32)?", r"IBM ?Z( ?32)?")
    SPARC_64 = ("sparc", 64, "big", r"(SPARC ?(64|v(9|[1-9][01]))|Ultra-?SPARC)")
    SPARC_32 = ("sparc", 32, "big", r"(hyper|micro|Super|Turbo)?SPARC( ?32)?")
    SUPERH_32_BE = (
        "superh",
        32,
        "big",
        r"SuperH( ?32)? ?(BE|EB)",
        r"SuperH ?(BE|EB)32",
        r"SH ?32 ?(BE|EB)",
        r"SH ?(BE|EB)32",
        r"SH[34]A? ?(BE|EB)",
    )
    SUPERH_32 = ("superh", 32, "little", r"SuperH( ?32)?", r"SH ?32", r"SH[34]A?")
    X86_64 = (
        "x86",
        64,
        "little",
        r"(amd ?|win ?|x(86 ?)?)64",
        r"em64t",
        r"i[89]86",
        r"ia32e",
    )
    X86_32 = ("x86", 32, "little", r"(ia|x)32", r"(i[1-7]|x)86", r"pentium", r"win ?32")

    def __init__(
        self, family: Family, bitness: int, byteorder: ByteOrder, *patterns: str
    ) -> None:
        self.family = family
        self.bitness = bitness
        self.byteorder = byteorder
        self.aliases = tuple(platid.aliases.AliasRule(pattern) for pattern in patterns)

    @classmethod
    def kind(cls) -> str:
        return "architecture"

    @classmethod
    def signal_keys(cls) -> tuple[str, ...]:
        return (platid.props.OS_ARCH,)

    @classmethod
    def current_or_none(
        cls, props: platid.props.Properties | None = None
    ) -> "Arch | None":
        """Resolve the architecture from the os.arch signal, or None."""
        value = platid.props.get_properties(props).get(platid.props.OS_ARCH)
        if value is None:
            return None
        special = _RUNTIME_VALUES.get(platid.text.normalize(value, strip=True))
        if special is not None:
            return special
        return cls.parse_or_none(value)

    @property
    def is_32bit(self) -> bool:
        return self.bitness == 32

    @property
    def is_64bit(self) -> bool:
        return self.bitness == 64

    @property
    def is_big_endian(self) -> bool:
        return self.byteorder == "big"

    @property
    def is_little_endian(self) -> bool:
        return self.byteorder == "little"

    @property
    def is_alpha(self) -> bool:
        return self.family == "alpha"

    @property
    def is_arm(self) -> bool:
        return self.family == "arm"

    @property
    def is_arm_be(self) -> bool:
        return self.is_arm and self.is_big_endian

    @property
    def is_arm_le(self) -> bool:
        return self.is_arm and self.is_little_endian

    @property
    def is_itanium(self) -> bool:
        return self.family == "itanium"

    @property
    def is_m68k(self) -> bool:
        return self.family == "m68k"

    @property
    def is_mips(self) -> bool:
        return self.family == "mips"

    @property
    def is_mips_be(self) -> bool:
        return self.is_mips and self.is_big_endian

    @property
    def is_mips_le(self) -> bool:
        return self.is_mips and self.is_little_endian

    @property
    def is_ppc(self) -> bool:
        return self.family == "ppc"

    @property
    def is_ppc_be(self) -> bool:
        return self.is_ppc and self.is_big_endian

    @property
    def is_ppc_le(self) -> bool:
        return self.is_ppc and self.is_little_endian

    @property
    def is_riscv(self) -> bool:
        return self.family == "riscv"

    @property
    def is_s390(self) -> bool:
        return self.family == "s390"

    @property
    def is_sparc(self) -> bool:
        return self.family == "sparc"

    @property
    def is_superh(self) -> bool:
        return self.family == "superh"

    @property
    def is_x86(self) -> bool:
        return self.family == "x86"


# Bare values some runtimes report that are too short to be safe aliases.
_RUNTIME_VALUES: tp.Mapping[str, Arch] = types.MappingProxyType(
    {"sh": Arch.SUPERH_32, "shbe": Arch.SUPERH_32_BE}
)


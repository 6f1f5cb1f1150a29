from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path

from returns.io import IOResult, IOResultE
from returns.result import safe

from ketch.domain.notation import (
    ConfigValue,
    Empty,
    Identifier,
    KeyedList,
    List,
    find,
    parse_file,
)
from ketch.errors import ProjectValidationError

CONFIG_FILE = "ketchfile"


class Std(IntEnum):
    C89 = 89
    C99 = 99
    C11 = 11
    C17 = 17
    C23 = 23


@dataclass(frozen=True)
class Standard:
    std: Std = Std.C99
    gnu_extensions: bool = False

    def __str__(self) -> str:
        year = "2x" if self.std is Std.C23 else str(self.std.value)
        return f"{'gnu' if self.gnu_extensions else 'c'}{year}"

    @property
    def flag(self) -> str:
        return f"-std={self}"


class ProjectType(Enum):
    BINARY = "binary"
    SHARED = "shared"
    STATIC = "static"

    @property
    def label(self) -> str:
        match self:
            case ProjectType.BINARY:
                return "BIN"
            case ProjectType.SHARED:
                return "SHARED"
            case ProjectType.STATIC:
                return "STATIC"


class BuildScriptTiming(Enum):
    BEFORE = "before"
    REPEAT = "repeat"
    AFTER = "after"
    NONE = "none"


DEFAULT_COMPILER = "cc"
DEFAULT_FLAGS = (
    "-Wall",
    "-Wextra",
    "-Wwrite-strings",
    "-Werror=discarded-qualifiers",
)
DEFAULT_STANDARD = Standard()

# `ansi` is an alias of c89.
STANDARDS: dict[str, Standard] = {
    "ansi": Standard(Std.C89),
    **{
        f"{prefix}{std.value}": Standard(std, prefix == "gnu")
        for std in Std
        for prefix in ("c", "gnu")
    },
}

TIMINGS = tuple(t for t in BuildScriptTiming if t is not BuildScriptTiming.NONE)


@dataclass(frozen=True)
class Project:
    name: str
    version: str
    standard: Standard = DEFAULT_STANDARD
    compiler: str = DEFAULT_COMPILER
    flags: tuple[str, ...] = DEFAULT_FLAGS
    project_type: ProjectType = ProjectType.BINARY
    build_script_timing: BuildScriptTiming = BuildScriptTiming.NONE

    def __str__(self) -> str:
        return "\n".join(
            (
                f"CC       {self.compiler}",
                f"CFLAGS   {''.join(f'{flag} ' for flag in self.flags)}{self.standard.flag}",
                f"TYPE     {self.project_type.label}",
                f"NAME     {self.name}",
                f"VERSION  {self.version}",
            )
        )


def _single(body: List | None, key: str) -> str | None:
    """The text of a keyed list holding exactly one identifier."""
    match body:
        case None:
            return None
        case List((Identifier(text),)):
            return text
        case _:
            raise ProjectValidationError(key, f"Key `{key}` must be a single string.")


def _required(forms: Sequence[ConfigValue], key: str) -> str:
    match _single(find(forms, key), key):
        case None:
            raise ProjectValidationError(key, f"Key `{key}` must be a single string.")
        case text:
            return text


def _optional(forms: Sequence[ConfigValue], key: str, default: str) -> str:
    match _single(find(forms, key), key):
        case None:
            return default
        case text:
            return text


def _standard(forms: Sequence[ConfigValue]) -> Standard:
    match _single(find(forms, "standard"), "standard"):
        case None:
            return DEFAULT_STANDARD
        case raw if raw in STANDARDS:
            return STANDARDS[raw]
        case raw:
            raise ProjectValidationError(
                "standard",
                f"`{raw}` is not a valid C standard. "
                f"Valid standards are: {', '.join(STANDARDS)}.",
            )


def _flags(forms: Sequence[ConfigValue]) -> tuple[str, ...]:
    match find(forms, "flags"):
        case None:
            return DEFAULT_FLAGS
        case List(values):
            flags = []
            for value in values:
                match value:
                    case Identifier(flag):
                        flags.append(flag)
                    case List() | KeyedList() | Empty():
                        raise ProjectValidationError(
                            "flags", "Key `flags` must only contain identifiers."
                        )
            return tuple(flags)


def _project_type(forms: Sequence[ConfigValue]) -> ProjectType:
    match _single(find(forms, "type"), "type"):
        case None:
            return ProjectType.BINARY
        case raw if raw in {t.value for t in ProjectType}:
            return ProjectType(raw)
        case raw:
            raise ProjectValidationError(
                "type",
                f"`{raw}` is not a valid project type. Available project types: "
                f"{', '.join(t.value for t in ProjectType)}.",
            )


def _build_script_timing(forms: Sequence[ConfigValue]) -> BuildScriptTiming:
    match _single(find(forms, "buildscript"), "buildscript"):
        case None:
            return BuildScriptTiming.NONE
        case raw if raw in {t.value for t in TIMINGS}:
            return BuildScriptTiming(raw)
        case raw:
            raise ProjectValidationError(
                "buildscript",
                f"`{raw}` is not a valid build script timing. Available timings: "
                f"{', '.join(t.value for t in TIMINGS)}.",
            )


@safe((ProjectValidationError,))
def project_from_config(forms: Sequence[ConfigValue]) -> Project:
    return Project(
        name=_required(forms, "name"),
        version=_required(forms, "version"),
        standard=_standard(forms),
        compiler=_optional(forms, "cc", DEFAULT_COMPILER),
        flags=_flags(forms),
        project_type=_project_type(forms),
        build_script_timing=_build_script_timing(forms),
    )


def load_project(directory: Path) -> IOResultE[Project]:
    """Reads and validates `directory/ketchfile`. Nothing is cached between calls."""
    return parse_file(directory / CONFIG_FILE).bind(
        lambda forms: IOResult.from_result(project_from_config(forms))
    )

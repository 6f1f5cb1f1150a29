from collections.abc import Iterable
from pathlib import Path
import subprocess

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from ketch.domain.entities import Args, BuildStructure, CommandEntity
from ketch.domain.project import CONFIG_FILE, Project, ProjectType
from ketch.errors import (
    BuildDirectoryError,
    ProcessFailedError,
    ProcessLaunchError,
    SourceReadError,
)

RELEASE_FLAGS: Args = ("-O3",)
SHARED_FLAGS: Args = ("-fpic",)

ARCHIVER = "ar"

SRC_DIR = "src"
BUILD_DIR = "build"
SOURCE_SUFFIX = ".c"
OBJECT_SUFFIX = ".o"


def get_project_structure(directory: Path) -> BuildStructure:
    return BuildStructure(
        project=directory,
        build=Path(directory, BUILD_DIR),
        src=Path(directory, SRC_DIR),
        config=Path(directory, CONFIG_FILE),
    )


def _walk(directory: Path) -> Iterable[Path]:
    """Depth-first, entries of each directory in lexical order."""
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from _walk(entry)
        elif entry.is_file() and entry.name.endswith(SOURCE_SUFFIX):
            yield entry


def find_source_files(structure: BuildStructure) -> IOResultE[tuple[Path, ...]]:
    def _collect() -> tuple[Path, ...]:
        return tuple(
            file.relative_to(structure.project) for file in _walk(structure.src)
        )

    return impure_safe(_collect)().alt(
        lambda e: SourceReadError(f"Failed to read directory: {structure.src}: {e}.")
    )


def ensure_build_directory(structure: BuildStructure) -> IOResultE[Path]:
    return (
        impure_safe(structure.build.mkdir)(parents=True, exist_ok=True)
        .map(lambda _: structure.build)
        .alt(
            lambda e: BuildDirectoryError(
                f"Failed to create directory: {structure.build}: {e}."
            )
        )
    )


def obj_file_path(structure: BuildStructure, src_file: Path) -> Path:
    """`src/net/http.c` becomes `build/net_http.o`."""
    relative = src_file.relative_to(structure.src.relative_to(structure.project))
    flattened = "_".join(relative.with_suffix(OBJECT_SUFFIX).parts)
    return structure.build.relative_to(structure.project) / flattened


def compile_obj(
    project: Project, flags: Args, src_file: Path, obj_file: Path
) -> CommandEntity:
    return CommandEntity(
        output_path=obj_file,
        command=(
            project.compiler,
            *flags,
            *(SHARED_FLAGS if project.project_type is ProjectType.SHARED else ()),
            project.standard.flag,
            "-c",
            str(src_file),
            "-o",
            str(obj_file),
        ),
    )


def artifact_name(project: Project) -> str:
    match project.project_type:
        case ProjectType.BINARY:
            return project.name
        case ProjectType.STATIC:
            return f"lib{project.name}.a"
        case ProjectType.SHARED:
            return f"lib{project.name}.so"


def link(project: Project, obj_files: Iterable[Path]) -> CommandEntity:
    output = Path(artifact_name(project))
    objs = tuple(map(str, obj_files))
    match project.project_type:
        case ProjectType.BINARY:
            command = (project.compiler, *objs, "-o", str(output))
        case ProjectType.STATIC:
            command = (ARCHIVER, "rcs", *objs, str(output))
        case ProjectType.SHARED:
            command = (project.compiler, *objs, "-shared", "-o", str(output))
    return CommandEntity(output_path=output, command=command)


def subprocess_run(cmd: CommandEntity, cwd: Path) -> IOResultE[CommandEntity]:
    """Runs `cmd` to completion. There is no timeout."""
    try:
        res = subprocess.run(cmd.command, cwd=cwd)
    except OSError as e:
        return IOFailure(ProcessLaunchError(cmd.command, e.strerror or str(e)))
    if res.returncode:
        return IOFailure(ProcessFailedError(cmd.command, res.returncode))
    return IOSuccess(cmd)

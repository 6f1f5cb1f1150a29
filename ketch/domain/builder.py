from functools import reduce
from pathlib import Path

from returns.io import IOResultE, IOSuccess
from returns.pipeline import flow
from returns.pointfree import bind

from ketch.domain.context import BuildContext
from ketch.domain.entities import Args, BuildStructure, CommandEntity
from ketch.domain.project import BuildScriptTiming, Project
from ketch.domain.scripts import run_build_script
from ketch.domain.services import (
    RELEASE_FLAGS,
    compile_obj,
    ensure_build_directory,
    find_source_files,
    link,
    obj_file_path,
    subprocess_run,
)

Commands = tuple[CommandEntity, ...]


def _build_command_run(
    cmd: CommandEntity, structure: BuildStructure, verbose: bool
) -> IOResultE[CommandEntity]:
    if verbose:
        print(cmd)
    return subprocess_run(cmd, structure.project)


def _append(done: Commands):
    return lambda cmd: (*done, cmd)


def _compile_obj_files(
    project: Project,
    flags: Args,
    structure: BuildStructure,
    src_files: tuple[Path, ...],
    verbose: bool,
) -> IOResultE[Commands]:
    """Compiles one file at a time, the first failure skips everything after it."""

    def _compile(done: Commands, n: int, src: Path) -> IOResultE[Commands]:
        print(f"  [{n / len(src_files):5.0%} ]: compiling '{src}'")
        cmd = compile_obj(project, flags, src, obj_file_path(structure, src))
        res = _build_command_run(cmd, structure, verbose).map(_append(done))
        if project.build_script_timing is BuildScriptTiming.REPEAT:
            return res.bind(
                lambda cmds: run_build_script(structure.project, verbose).map(
                    _append(cmds)
                )
            )
        return res

    return reduce(
        lambda acc, item: acc.bind(lambda done: _compile(done, *item)),
        enumerate(src_files),
        IOSuccess(()),
    )


def _link_bin_file(
    project: Project,
    structure: BuildStructure,
    src_files: tuple[Path, ...],
    done: Commands,
    verbose: bool,
) -> IOResultE[Commands]:
    cmd = link(project, (obj_file_path(structure, src) for src in src_files))
    print(f"  [ 100% ]: linking '{cmd.output_path}'")
    return _build_command_run(cmd, structure, verbose).map(_append(done))


def _build_from_sources(
    project: Project,
    flags: Args,
    structure: BuildStructure,
    src_files: tuple[Path, ...],
    verbose: bool,
) -> IOResultE[Commands]:
    print(
        f"[ketch] building '{project.name}' {project.version} "
        f"({len(src_files)} files)"
    )
    return flow(
        _compile_obj_files(project, flags, structure, src_files, verbose),
        bind(lambda done: _link_bin_file(project, structure, src_files, done, verbose)),
    )


def build_project(
    project: Project,
    release: bool,
    structure: BuildStructure,
    verbose: bool = False,
) -> IOResultE[Commands]:
    """
    Runs every command needed to build `project` and returns them in order.

    Each command blocks until the process exits. The first launch failure or
    non-zero exit status ends the build and is returned as the failure.
    Objects already written are left in the build directory.
    """
    flags = (*project.flags, *RELEASE_FLAGS) if release else project.flags

    if project.build_script_timing is BuildScriptTiming.BEFORE:
        return run_build_script(structure.project, verbose).map(lambda cmd: (cmd,))

    res = flow(
        find_source_files(structure),
        bind(
            lambda src_files: ensure_build_directory(structure).map(
                lambda _: src_files
            )
        ),
        bind(
            lambda src_files: _build_from_sources(
                project, flags, structure, src_files, verbose
            )
        ),
    )
    if project.build_script_timing is BuildScriptTiming.AFTER:
        return res.bind(
            lambda done: run_build_script(structure.project, verbose).map(
                _append(done)
            )
        )
    return res


def build_bin(context: BuildContext) -> IOResultE[Commands]:
    return build_project(
        context.project, context.release, context.structure, context.verbose
    )

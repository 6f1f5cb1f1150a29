from pathlib import Path

from returns.io import IOFailure, IOResultE, IOSuccess

from ketch.domain.entities import CommandEntity
from ketch.domain.services import subprocess_run
from ketch.errors import BuildScriptNotFoundError

# Checked in this order, the first one that exists is run.
BUILD_SCRIPTS: tuple[tuple[str, str], ...] = (
    ("build.sh", "sh"),
    ("build.py", "python3"),
)


def find_build_script(project: Path) -> IOResultE[CommandEntity]:
    for script, interpreter in BUILD_SCRIPTS:
        if Path(project, script).is_file():
            return IOSuccess(CommandEntity(output_path=None, command=(interpreter, script)))
    return IOFailure(BuildScriptNotFoundError(script for script, _ in BUILD_SCRIPTS))


def run_build_script(project: Path, verbose: bool = False) -> IOResultE[CommandEntity]:
    def _run(cmd: CommandEntity) -> IOResultE[CommandEntity]:
        print(f"  [script]: running '{cmd.command[-1]}'")
        if verbose:
            print(cmd)
        return subprocess_run(cmd, project)

    return find_build_script(project).bind(_run)

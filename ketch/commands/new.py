from pathlib import Path

from returns.io import IOFailure, IOResultE, impure_safe

from ketch.domain.project import load_project
from ketch.domain.services import get_project_structure
from ketch.errors import BuildDirectoryError


def _create_file(file: Path, content: str) -> Path:
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(content)
    return file


@impure_safe
def _scaffold(directory: Path) -> Path:
    structure = get_project_structure(directory)
    structure.src.mkdir(parents=True)
    structure.build.mkdir(parents=True)

    _create_file(
        structure.config,
        f"""\
(name {directory.name})
(version 0.1.0)
""",
    )

    _create_file(
        Path(structure.src, "main.c"),
        """\
#include <stdlib.h>

int
main (void)
{
  return EXIT_SUCCESS;
}
""",
    )
    return directory


def new(args) -> IOResultE[int]:
    directory: Path = args.dir / args.name
    if directory.exists():
        return IOFailure(BuildDirectoryError(f"Directory exists! {directory}"))
    return (
        _scaffold(directory)
        .alt(lambda e: BuildDirectoryError(f"Failed to create project: {directory}: {e}."))
        .bind(load_project)
        .map(lambda project: print(f"[ketch] created '{project.name}'"))
        .map(lambda _: 0)
    )

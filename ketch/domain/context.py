from dataclasses import dataclass
from pathlib import Path

from returns.io import IOResultE

from ketch.domain.entities import BuildStructure
from ketch.domain.project import Project, load_project
from ketch.domain.services import get_project_structure


@dataclass(frozen=True)
class BuildContext:
    project: Project
    structure: BuildStructure

    release: bool
    verbose: bool

    @classmethod
    def create_from_config(
        cls, directory: Path, release: bool = False, verbose: bool = False
    ) -> IOResultE["BuildContext"]:
        return load_project(directory).map(
            lambda project: cls(
                project=project,
                structure=get_project_structure(directory),
                release=release,
                verbose=verbose,
            )
        )

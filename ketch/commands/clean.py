from pathlib import Path
import shutil

from returns.io import IOResultE, impure_safe

from ketch.domain.services import get_project_structure
from ketch.errors import BuildDirectoryError


def remove_dir(d: Path) -> Path:
    if d.exists():
        shutil.rmtree(d)
    return d


def clean(args) -> IOResultE[int]:
    build = get_project_structure(args.dir).build
    return (
        impure_safe(remove_dir)(build)
        .alt(lambda e: BuildDirectoryError(f"Failed to remove directory: {build}: {e}."))
        .map(lambda _: 0)
    )

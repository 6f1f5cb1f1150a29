from pathlib import Path
import subprocess

import pytest

from ketch.domain import services


class ProcessRecorder:
    """Stands in for `subprocess.run` and remembers every command."""

    def __init__(self):
        self.commands: list[tuple[str, ...]] = []
        self.cwds: list[Path] = []
        self.fail_at: set[int] = set()
        self.missing: set[str] = set()

    def __call__(self, cmd, cwd=None, **kwargs):
        self.commands.append(tuple(cmd))
        self.cwds.append(cwd)
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        returncode = 1 if len(self.commands) in self.fail_at else 0
        return subprocess.CompletedProcess(cmd, returncode)


@pytest.fixture
def recorder(monkeypatch) -> ProcessRecorder:
    rec = ProcessRecorder()
    monkeypatch.setattr(services.subprocess, "run", rec)
    return rec


def write_sources(directory: Path, *files: str) -> None:
    for file in files:
        path = Path(directory, "src", file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("int x;\n")


@pytest.fixture
def project_dir(tmp_path) -> Path:
    write_sources(tmp_path, "a.c", "b.c", "c.c")
    return tmp_path

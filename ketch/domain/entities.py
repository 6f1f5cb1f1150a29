from dataclasses import dataclass
from pathlib import Path

Args = tuple[str, ...]
Cmd = tuple[str, ...]


@dataclass(frozen=True)
class CommandEntity:
    output_path: Path | None
    command: Cmd

    def __str__(self) -> str:
        return " ".join(self.command)


@dataclass(frozen=True)
class BuildStructure:
    project: Path
    build: Path
    src: Path
    config: Path

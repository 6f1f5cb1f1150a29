from collections.abc import Iterable


class KetchError(Exception):
    """Base class of every error the build can end with."""

    exit_status: int = 1


class ConfigReadError(KetchError):
    exit_status = 74


class SourceReadError(KetchError):
    exit_status = 74


class BuildDirectoryError(KetchError):
    exit_status = 74


class NotationSyntaxError(KetchError):
    exit_status = 65

    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line


class ProjectValidationError(KetchError):
    exit_status = 78

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class ProcessLaunchError(KetchError):
    exit_status = 127

    def __init__(self, command: Iterable[str], reason: str):
        self.command = tuple(command)
        super().__init__(f"Failed to summon command: `{' '.join(self.command)}`: {reason}")


class ProcessFailedError(KetchError):
    def __init__(self, command: Iterable[str], returncode: int):
        self.command = tuple(command)
        self.returncode = returncode
        super().__init__(
            f"`{' '.join(self.command)}` exited with status {returncode}. "
            "Aborting at first failed command."
        )


class BuildScriptNotFoundError(KetchError):
    exit_status = 66

    def __init__(self, candidates: Iterable[str]):
        self.candidates = tuple(candidates)
        super().__init__(
            f"No build script found. Checked: {', '.join(self.candidates)}."
        )

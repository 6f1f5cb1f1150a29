import sys

from returns.io import IOFailure, IOResultE
from returns.unsafe import unsafe_perform_io

from ketch.args import ArgsConfig, args_parse
from ketch.commands import build, clean, new, show
from ketch.errors import KetchError


def ketch(args: ArgsConfig) -> IOResultE[int]:
    match args.action:
        case "new":
            return new(args)
        case "build":
            return build(args)
        case "show":
            return show(args)
        case "clean":
            return clean(args)
        case action:
            raise Exception(f"{action} is not implemented yet")


def exit_status(error: Exception) -> int:
    if isinstance(error, KetchError):
        return error.exit_status
    return 1


def main(argv: list[str] | None = None) -> int:
    args = args_parse(sys.argv[1:] if argv is None else argv)
    result = ketch(args)
    if isinstance(result, IOFailure):
        error = unsafe_perform_io(result.failure())
        print(f"[ketch] Error: {error}", file=sys.stderr)
        return exit_status(error)
    return unsafe_perform_io(result.unwrap())


if __name__ == "__main__":
    sys.exit(main())

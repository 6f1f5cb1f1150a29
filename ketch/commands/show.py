from returns.io import IOResultE

from ketch.domain.project import load_project


def show(args) -> IOResultE[int]:
    return load_project(args.dir).map(print).map(lambda _: 0)

from returns.io import IOResultE

from ketch.domain.builder import build_bin
from ketch.domain.context import BuildContext


def build(args) -> IOResultE[int]:
    return (
        BuildContext.create_from_config(args.dir, args.release, args.verbose)
        .bind(build_bin)
        .map(lambda _: 0)
    )

"""Command line interface for the C-Rust program pair corpus."""


import argparse
import json
from pathlib import Path

from crpairs.config import CorpusPaths
from crpairs.corpus import delete, download_program_pairs
from crpairs.errors import CorpusError
from crpairs.logging import configure_logger
from crpairs.metadata import update_metadata_file
from crpairs.sources import resolve_sorted


def cmd_download(args: argparse.Namespace) -> int:
    paths = CorpusPaths.from_root(args.root)
    download_program_pairs(paths, demo=False)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    paths = CorpusPaths.from_root(args.root)
    download_program_pairs(paths, demo=True)
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    delete(CorpusPaths.from_root(args.root))
    return 0


def cmd_metadata(args: argparse.Namespace) -> int:
    repository = Path(args.repository)
    if not repository.is_dir():
        raise FileNotFoundError(f"Missing repository directory: {repository}")

    source_paths = resolve_sorted(args.program_name, repository, exact_key=args.exact_key)
    if args.json:
        print(json.dumps(source_paths, indent=2))
    else:
        for path in source_paths:
            print(path)
    return 0


def cmd_update_metadata(args: argparse.Namespace) -> int:
    metadata_file = Path(args.metadata_file)
    repository = Path(args.repository)
    if not repository.is_dir():
        raise FileNotFoundError(f"Missing repository directory: {repository}")

    update_metadata_file(metadata_file, repository, exact_key=args.exact_key)
    return 0


def _common_options(*, suppress_defaults: bool) -> argparse.ArgumentParser:
    # Subcommands take the same options; SUPPRESS keeps them from overwriting
    # values given before the subcommand name.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        default=argparse.SUPPRESS if suppress_defaults else ".",
        help="Project root holding metadata/ and the output directories",
    )
    common.add_argument("--log-file", default=argparse.SUPPRESS if suppress_defaults else None)
    common.add_argument("--verbose", action="store_true", default=argparse.SUPPRESS if suppress_defaults else False)
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crpairs",
        description="Manages the corpus of C-Rust program pairs",
        parents=[_common_options(suppress_defaults=False)],
    )
    parser.set_defaults(func=cmd_download)
    subparsers = parser.add_subparsers(dest="command")
    common = [_common_options(suppress_defaults=True)]

    download = subparsers.add_parser("download", parents=common, help="Download all C-Rust program pairs")
    download.set_defaults(func=cmd_download)

    demo = subparsers.add_parser("demo", parents=common, help="Download the demonstration subset of the corpus")
    demo.set_defaults(func=cmd_demo)

    delete_cmd = subparsers.add_parser(
        "delete", parents=common, help="Delete the program_pairs and repository_clones directories"
    )
    delete_cmd.set_defaults(func=cmd_delete)

    metadata = subparsers.add_parser(
        "metadata", parents=common, help="List the source files of a C program in a repository"
    )
    metadata.add_argument("program_name", help='The program name, e.g. "diff"')
    metadata.add_argument("repository", help="Path to the repository directory")
    metadata.add_argument("--exact-key", action="store_true", help="Match <program>_SOURCES as a whole variable name")
    metadata.add_argument("--json", action="store_true")
    metadata.set_defaults(func=cmd_metadata)

    update = subparsers.add_parser(
        "update-metadata", parents=common, help="Rewrite the C source paths of a metadata file"
    )
    update.add_argument("metadata_file")
    update.add_argument("repository")
    update.add_argument("--exact-key", action="store_true")
    update.set_defaults(func=cmd_update_metadata)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = configure_logger(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        return args.func(args)
    except CorpusError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

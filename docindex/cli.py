"""CLI entrypoints for docindex commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import DocIndexError
from .logging import configure_logging
from .orchestrator import AddOutcome, Orchestrator

_FAILURE_PREVIEW = 5


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_output_option(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"{help_text} (defaults to AGENTS.md or the value in .docindex.yml).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docindex",
        description="Download documentation and embed compressed indexes into AGENTS.md files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser(
        "add",
        help="Download documentation from a GitHub repository or llms.txt URL and index it.",
    )
    _add_verbose_option(add_parser, suppress_default=True)
    add_parser.add_argument(
        "source",
        help="Documentation source (GitHub URL or URL ending in /llms.txt).",
    )
    _add_output_option(add_parser, "Output file (AGENTS.md, CLAUDE.md, etc.)")
    add_parser.add_argument(
        "-d",
        "--docs-dir",
        default=None,
        help="Directory to store downloaded docs (defaults to .docs).",
    )
    add_parser.add_argument(
        "-p",
        "--path",
        default="",
        help="Subdirectory in the repository to download (GitHub only).",
    )
    add_parser.add_argument(
        "-n",
        "--source-name",
        default=None,
        help="Custom name for the documentation source.",
    )
    add_parser.add_argument(
        "-b",
        "--branch",
        default=None,
        help="Git branch to download from (GitHub only).",
    )
    add_parser.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not add the docs directory to .gitignore.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List all documentation sources in the output file.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_output_option(list_parser, "Output file to check")

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove a documentation source from the output file.",
    )
    _add_verbose_option(remove_parser, suppress_default=True)
    remove_parser.add_argument("source_name", help="Name of the source block to remove.")
    _add_output_option(remove_parser, "Output file to modify")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docindex commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        orchestrator = Orchestrator()
        if args.command == "add":
            _run_add(orchestrator, args)
        elif args.command == "list":
            _run_list(orchestrator, args)
        elif args.command == "remove":
            if not _run_remove(orchestrator, args):
                parser.exit(1)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except DocIndexError as exc:
        parser.exit(1, f"docindex {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    except Exception as exc:  # pragma: no cover - unexpected failure
        parser.exit(1, f"docindex {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_add(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    progress = _progress_printer() if sys.stderr.isatty() else None
    result = orchestrator.run_add(
        args.source,
        output=args.output,
        docs_dir=args.docs_dir,
        path=args.path,
        source_name=args.source_name,
        branch=args.branch,
        update_gitignore=False if args.no_gitignore else None,
        on_progress=progress,
    )
    if progress is not None:
        sys.stderr.write("\n")
    _print_add_summary(result)


def _run_list(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    output = args.output or orchestrator.config.output
    sources = orchestrator.run_list(output=args.output)
    if not sources:
        print(f"No documentation sources found in {output}")
        print("Add documentation using:")
        print("  docindex add https://github.com/owner/repo")
        print("  docindex add https://example.com/llms.txt")
        return
    print(f"Documentation sources in {output}:")
    for position, source in enumerate(sources, start=1):
        print(f"  {position}. {source}")


def _run_remove(orchestrator: Orchestrator, args: argparse.Namespace) -> bool:
    output = args.output or orchestrator.config.output
    if orchestrator.run_remove(args.source_name, output=args.output):
        print(f"Removed {args.source_name} from {output}")
        print(f"Note: the downloaded documentation files are still in {orchestrator.config.docs_dir}/")
        return True
    print(f'Source "{args.source_name}" not found in {output}')
    available = orchestrator.run_list(output=args.output)
    if available:
        print("Available sources:")
        for source in available:
            print(f"  - {source}")
    return False


def _progress_printer():
    def _report(current: int, total: int, file: str) -> None:
        sys.stderr.write(f"\rDownloading ({current}/{total}): {file}\033[K")
        sys.stderr.flush()

    return _report


def _print_add_summary(result: AddOutcome) -> None:
    download = result.download
    noun = "file" if download.succeeded == 1 else "files"
    print(f"Downloaded {download.succeeded} {noun} to {_relativize(result.docs_path)}")
    if result.branch:
        print(f"  Branch: {result.branch}")
    if result.detected_path:
        print(f"  Auto-detected documentation folder: {result.detected_path}")
    if download.failed:
        print(f"  {len(download.failed)} file(s) failed to download:")
        for path in download.failed[:_FAILURE_PREVIEW]:
            print(f"    - {path}")
        if len(download.failed) > _FAILURE_PREVIEW:
            print(f"    ... and {len(download.failed) - _FAILURE_PREVIEW} more")
    if result.gitignore_updated:
        print("  Added docs directory to .gitignore")
    print(f"Indexed {result.file_count} files in {result.directory_count} directories")

    output = _relativize(result.output_path)
    if result.created:
        print(f"Created {output}")
    elif result.updated:
        print(f"Updated existing index in {output}")
    else:
        print(f"Added new index to {output}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

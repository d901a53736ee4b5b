"""CLI entrypoints for docport commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import MalformedDeclarationError
from .logging import configure_logging
from .orchestrator import Orchestrator, RunReport


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docport",
        description="Point undocumented public C# declarations at shared XML documentation.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Add include references to every configured project.",
    )
    _add_verbose_option(run_parser, suppress_default=True)
    run_parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help="Path to .docport.yml or the directory holding it (defaults to current directory).",
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the references that would be added without writing anything.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docport commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "run":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(2, f"docport: {exc}\n")

        dry_run = bool(getattr(args, "dry_run", False))
        orchestrator = Orchestrator()
        try:
            reports = orchestrator.run(config, dry_run=dry_run)
        except MalformedDeclarationError as exc:
            parser.exit(1, f"docport run aborted: {exc}\n")
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"docport run failed: {exc}\n")

        total = RunReport(dry_run=dry_run)
        for root, report in reports.items():
            print(f"{_relativize(root)}: {_summary(report)}")
            total.merge(report)
        if len(reports) > 1:
            print(f"total: {_summary(total)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _summary(report: RunReport) -> str:
    text = f"fixed {report.fixed}, skipped {report.skipped}, ambiguous {report.ambiguous}"
    if report.failed_partitions:
        text += f", failed {', '.join(report.failed_partitions)}"
    if report.dry_run:
        text += " (dry-run)"
    return text


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

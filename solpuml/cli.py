"""CLI entrypoint for solpuml."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_FILE, DiagramConfig, load_config
from .errors import ConfigError, EnumerationError, WriteError
from .logging import configure_logging, get_logger, write_failure_summary
from .pipeline import DiagramPipeline, write_document
from .sources import SourceEnumerator

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_DEGRADED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solpuml",
        description="Generates PlantUML class diagrams from Solidity source code.",
    )
    parser.add_argument(
        "-i",
        "--input-path",
        default=None,
        help=f"Path to the folder containing .sol files (default: ./{DEFAULT_INPUT_PATH}).",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        default=None,
        help=f"Name of the output .puml file (default: {DEFAULT_OUTPUT_FILE}).",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of files to parse in parallel (default: 1).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .solpuml.yml file (defaults to one inside the input folder).",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the diagram instead of writing the output file.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a non-zero status when any file fails to parse or extract.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> DiagramConfig:
    if args.config:
        return load_config(Path(args.config))
    input_path = Path(args.input_path or DEFAULT_INPUT_PATH)
    if input_path.is_dir():
        return load_config(input_path)
    return DiagramConfig(root=Path.cwd())


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    try:
        settings = _load_settings(args)
    except ConfigError as exc:
        parser.exit(EXIT_FAILED, f"solpuml: invalid configuration: {exc}\n")

    input_path = Path(args.input_path) if args.input_path else settings.input_path or Path(DEFAULT_INPUT_PATH)
    output_file = Path(args.output_file) if args.output_file else settings.output_file or Path(DEFAULT_OUTPUT_FILE)
    jobs = args.jobs if args.jobs is not None else settings.jobs or 1
    if jobs < 1:
        parser.error("--jobs must be at least 1")

    pipeline = DiagramPipeline(
        enumerator=SourceEnumerator(
            extensions=settings.extensions,
            exclude_paths=settings.exclude_paths,
        ),
        jobs=jobs,
    )

    try:
        report = pipeline.run(input_path)
    except EnumerationError as exc:
        parser.exit(EXIT_FAILED, f"solpuml: could not scan sources: {exc}\n")

    if args.stdout:
        sys.stdout.write(report.document)
    else:
        try:
            target = write_document(report.document, output_file)
        except WriteError as exc:
            parser.exit(EXIT_FAILED, f"solpuml: {exc}\n")
        print(f"Diagram written to {_relativize(target)}")

    write_failure_summary(report.errors, sys.stderr)
    if report.degraded and args.strict:
        logger.error("Run degraded: %d file(s) failed", len(report.errors))
        return EXIT_DEGRADED
    return EXIT_OK


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def run() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()

#!/usr/bin/env python3
"""
roster-render CLI - Thin entrypoint for operator commands.

Commands:
- run: Render the selected compositions across a roster range
- validate: Check a project and inputs without rendering

Design Principles:
==================
- CLI is a dispatcher only
- No orchestration logic inside CLI
- Surface the orchestrator's message verbatim
- Exit non-zero on failure
- Prompt only for inputs not given as flags

Exit Codes:
===========
- 0: Success
- 1: Precondition failure (nothing was touched)
- 2: Run failure (aborted mid-range)
- 4: System error (manifest or settings file missing/invalid)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

from .prompt import ConfigPrompt
from ..batch.models import BatchRequest
from ..batch.orchestrator import BatchOrchestrator
from ..errors import FailureKind, PreconditionError
from ..execution.memory import MemoryRenderQueue
from ..manifest import ManifestError, ProjectManifest
from ..project.memory import MemoryProject
from ..settings import RenderSettings, SettingsError, load_settings

logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_PRECONDITION = 1
EXIT_RUN_FAILURE = 2
EXIT_SYSTEM_ERROR = 4


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_host(args: argparse.Namespace) -> Tuple[RenderSettings, MemoryProject, MemoryRenderQueue]:
    """
    Load settings and build the manifest host.

    Raises:
        SystemExit(4): Settings or manifest missing or invalid
    """
    try:
        settings = load_settings(Path(args.settings) if args.settings else None)
    except SettingsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_SYSTEM_ERROR)

    try:
        manifest = ProjectManifest.load(Path(args.project))
    except ManifestError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_SYSTEM_ERROR)

    project, queue = manifest.build(settings)
    return settings, project, queue


def _request_from_args(
    args: argparse.Namespace,
    settings: RenderSettings,
    orchestrator: BatchOrchestrator,
) -> BatchRequest:
    """
    Build the run request, prompting for missing inputs.

    The project is checked before prompting; if it is not usable the
    request is returned as given and validation reports the problem.
    """
    request = BatchRequest(start=args.start, end=args.end, output_root=args.output)
    if args.no_prompt:
        return request

    try:
        orchestrator.validate_project()
    except PreconditionError:
        return request

    return ConfigPrompt().complete(request, settings.roster_size)


def cmd_run(args: argparse.Namespace) -> NoReturn:
    """
    Render a roster range.

    Exit codes:
        0: Every index rendered, selector restored
        1: Precondition failure
        2: Aborted mid-range
        4: Manifest or settings file error
    """
    settings, project, queue = _load_host(args)
    orchestrator = BatchOrchestrator.for_host(project, queue, settings=settings)
    request = _request_from_args(args, settings, orchestrator)

    result = orchestrator.run(request)

    if args.json:
        print(result.to_json())
    else:
        print(result.message)
        logger.info(result.summary())

    if result.success:
        sys.exit(EXIT_SUCCESS)
    elif result.failure_kind == FailureKind.PRECONDITION:
        sys.exit(EXIT_PRECONDITION)
    else:
        sys.exit(EXIT_RUN_FAILURE)


def cmd_validate(args: argparse.Namespace) -> NoReturn:
    """
    Validate project and inputs without rendering.

    Exit codes:
        0: A run with these inputs would start
        1: Precondition failure
        4: Manifest or settings file error
    """
    settings, project, queue = _load_host(args)
    orchestrator = BatchOrchestrator.for_host(project, queue, settings=settings)
    request = _request_from_args(args, settings, orchestrator)

    try:
        context = orchestrator.validate(request)
    except PreconditionError as e:
        print(e.message, file=sys.stderr)
        sys.exit(EXIT_PRECONDITION)

    print(f"✓ Ready to render: {context.output_root}")
    print(f"  Compositions: {', '.join(item.name for item in context.selected_items)}")
    print(f"  Entries: {context.index_range.start}..{context.index_range.end}")
    print(f"  Jobs: {len(context.index_range) * len(context.selected_items)}")
    print(f"  Selector currently at: {context.original_selector_value}")
    sys.exit(EXIT_SUCCESS)


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        required=True,
        help="Path to project manifest JSON",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="First roster index (prompted if omitted)",
    )
    parser.add_argument(
        "--end",
        type=int,
        default=None,
        help="Last roster index (prompted if omitted)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Destination root folder (prompted if omitted)",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Settings JSON (default: $ROSTER_RENDER_SETTINGS, then built-in defaults)",
    )
    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Never prompt; missing inputs fail validation",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roster-render",
        description="Render selected compositions once per roster entry",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to execute")

    # Run command
    parser_run = subparsers.add_parser(
        "run",
        help="Render the selected compositions across a roster range",
    )
    _add_run_arguments(parser_run)
    parser_run.add_argument(
        "--json",
        action="store_true",
        help="Print the full run result as JSON",
    )
    parser_run.set_defaults(func=cmd_run)

    # Validate command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Check project and inputs without rendering",
    )
    _add_run_arguments(parser_validate)
    parser_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Main CLI entrypoint.

    Parses arguments and dispatches to subcommands.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Entry point for the fnkit CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from collections import deque
from pathlib import Path
from textwrap import dedent

from functionkit import __version__
from functionkit.adapters.console_prompter import ConsolePrompter
from functionkit.adapters.local_fs import LocalFileSystem
from functionkit.app.attach_action import AttachActionService, AttachResult, PreconditionMissingError
from functionkit.app.functions import FunctionScaffoldService
from functionkit.domain.errors import FunctionkitError
from functionkit.domain.project import (
    PROJECT_DESCRIPTOR,
    PROJECT_DIR,
    ProjectId,
    ProjectNotInitialisedError,
    ServiceInstance,
    load_instances,
)
from functionkit.plugins.loader import ServicePluginRegistry, load_service_plugins
from functionkit.settings import SETTINGS
from functionkit.utils.telemetry import clear as telemetry_clear
from functionkit.utils.telemetry import iter_events as telemetry_iter
from functionkit.utils.telemetry import record_structured_event, summarize as telemetry_summarize


HELP_OVERVIEW = dedent(
    f"""
    Manage service functions in a multi-service project.

    Commands run against the current directory, which must contain
    {PROJECT_DIR}/{PROJECT_DESCRIPTOR} listing the project's service instances:

      instances:
        - name: api
          plugin: service-node
          path: backend/api

    Typical flow:
      - fnkit functions:add send-email       - scaffold a function file
      - fnkit function:attach-action         - wire a function directory to an action
    """
)


def _default_project_path() -> Path:
    return Path(os.getcwd())


def _print_project_hint(project_path: Path) -> None:
    print(f"Path {project_path} does not contain a functionkit project.", file=sys.stderr)
    print(f"Create {PROJECT_DIR}/{PROJECT_DESCRIPTOR} with an 'instances' list and try again.", file=sys.stderr)


def _load_project(project_path: Path) -> tuple[ServicePluginRegistry, list[ServiceInstance]]:
    plugins = load_service_plugins()
    project_id = ProjectId.from_existing(project_path)
    return plugins, load_instances(project_id, plugins)


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 3)


def _print_attach_result(result: AttachResult, project_path: Path) -> None:
    if result.function_path is None:
        return
    target = os.path.relpath(result.function_path, project_path)
    if result.renamed:
        print(f"Renamed function '{result.raw_name}' to '{result.canonical_name}'")
    print(f"Attached action '{result.canonical_name}' to {target}")
    for path in result.copied_files:
        print(f"  + {path.as_posix()}")


def _attach_action_cmd(args: argparse.Namespace) -> int:
    started = time.monotonic()
    project_path = _default_project_path()
    try:
        plugins, instances = _load_project(project_path)
    except ProjectNotInitialisedError:
        _print_project_hint(project_path)
        return 1
    except FunctionkitError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    service = AttachActionService(
        plugins,
        instances,
        ConsolePrompter(),
        LocalFileSystem(),
        service_names=plugins.names(),
        cwd=project_path,
    )
    try:
        result = service.run()
    except PreconditionMissingError as exc:
        print(str(exc), file=sys.stderr)
        record_structured_event(
            SETTINGS,
            "function.attach_action",
            payload={"reason": str(exc)},
            level="warn",
            status="aborted",
            duration_ms=_elapsed_ms(started),
        )
        return 0
    except FunctionkitError as exc:
        print(str(exc), file=sys.stderr)
        record_structured_event(
            SETTINGS,
            "function.attach_action",
            payload={"error": type(exc).__name__, "reason": str(exc)},
            level="error",
            status="failed",
            duration_ms=_elapsed_ms(started),
        )
        return 1

    if result.message:
        print(result.message)
    _print_attach_result(result, project_path)
    record_structured_event(
        SETTINGS,
        "function.attach_action",
        payload=result.as_dict(),
        status=result.status,
        duration_ms=_elapsed_ms(started),
    )
    return 0


def _functions_add_cmd(args: argparse.Namespace) -> int:
    project_path = _default_project_path()
    try:
        _, instances = _load_project(project_path)
    except ProjectNotInitialisedError:
        _print_project_hint(project_path)
        return 1
    except FunctionkitError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    service = FunctionScaffoldService(instances, ConsolePrompter(), LocalFileSystem())
    try:
        result = service.add(args.function_name)
    except FunctionkitError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if result is None:
        return 0
    record_structured_event(
        SETTINGS,
        "functions.add",
        payload={"instance": result.instance_name, "function": result.function_name},
        status="completed",
    )
    print(f"Function '{result.function_name}' written to {os.path.relpath(result.path, project_path)}")
    return 0


def _telemetry_cmd(args: argparse.Namespace) -> int:
    if args.telemetry_command == "report":
        recent = getattr(args, "recent", 0)
        if recent and recent > 0:
            events = list(deque(telemetry_iter(SETTINGS), maxlen=recent))
        else:
            events = list(telemetry_iter(SETTINGS))
        summary = telemetry_summarize(events)
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0
    if args.telemetry_command == "clear":
        telemetry_clear(SETTINGS)
        print("Telemetry log cleared")
        return 0
    if args.telemetry_command == "tail":
        for evt in deque(telemetry_iter(SETTINGS), maxlen=args.limit):
            print(json.dumps(evt, ensure_ascii=False))
        return 0
    print("Unsupported telemetry command", file=sys.stderr)
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fnkit",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"fnkit {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    attach_cmd = sub.add_parser("function:attach-action", help="Adds a graphql action against the function")
    attach_cmd.set_defaults(func=_attach_action_cmd)

    add_cmd = sub.add_parser("functions:add", help="Adds a function (handler) to the project")
    add_cmd.add_argument("function_name", metavar="function-name", help="name of the function to be added")
    add_cmd.set_defaults(func=_functions_add_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect the local telemetry log")
    telemetry_sub = telemetry_cmd.add_subparsers(dest="telemetry_command", required=True)
    telemetry_report = telemetry_sub.add_parser("report", help="Summarise recorded events")
    telemetry_report.add_argument("--recent", type=int, default=0, help="Only summarise the last N events")
    telemetry_tail = telemetry_sub.add_parser("tail", help="Print the most recent events")
    telemetry_tail.add_argument("--limit", type=int, default=20, help="Number of events to print (default: 20)")
    telemetry_sub.add_parser("clear", help="Delete the telemetry log")
    telemetry_cmd.set_defaults(func=_telemetry_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line playground for promptkit widgets.
"""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
import threading
import time
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.table import Table

from promptkit.config import PromptSettings, get_settings, set_settings
from promptkit.errors import PromptCancelledError, TerminalUnavailableError
from promptkit.logging import setup_logging
from promptkit.output import Draft, DraftLine, ProgressBar, Spinner
from promptkit.prompts import (
    AutocompleteConfig,
    ConfirmConfig,
    DateConfig,
    EditorConfig,
    FilepathConfig,
    FormConfig,
    FormField,
    ListConfig,
    MultiselectConfig,
    NumberConfig,
    PasswordConfig,
    PromptConfig,
    SelectConfig,
    TextConfig,
    ToggleConfig,
    prompt,
)
from promptkit.validation import v

console = Console()

LANGUAGES = ["Python", "JavaScript", "TypeScript", "Java", "Go", "Rust", "Kotlin", "Swift"]


def _demo_configs() -> dict[str, Callable[[], PromptConfig]]:
    today = date.today()
    return {
        "text": lambda: TextConfig(
            "Project name", placeholder="my-app", validate=v.string().min_length(2)
        ),
        "password": lambda: PasswordConfig("API token", required=True),
        "number": lambda: NumberConfig(
            "Port", default=8080, min=1, max=65535, integer=True
        ),
        "confirm": lambda: ConfirmConfig("Initialise a git repository?", default=True),
        "toggle": lambda: ToggleConfig("Telemetry", active="On", inactive="Off"),
        "select": lambda: SelectConfig(
            "License", options=[("MIT", "mit"), ("Apache 2.0", "apache-2.0"), ("GPL v3", "gpl-3.0")]
        ),
        "multiselect": lambda: MultiselectConfig(
            "Features", options=["Linting", "Testing", "Docs", "CI"], min=1, max=3
        ),
        "autocomplete": lambda: AutocompleteConfig("Language", options=LANGUAGES, limit=5),
        "filepath": lambda: FilepathConfig("Config file", file_only=True),
        "editor": lambda: EditorConfig("Release notes", default="# Changes\n", extension="md"),
        "list": lambda: ListConfig("Tags", min=1, max=5),
        "date": lambda: DateConfig("Release date", min=today, max=today + timedelta(days=90)),
        "form": lambda: FormConfig(
            "Author",
            fields=[
                FormField("name", "Name", required=True),
                FormField("email", "Email", validator=v.string().email()),
                FormField("age", config=NumberConfig("Age", min=0, integer=True)),
            ],
        ),
    }


DEMO_KINDS = [*_demo_configs(), "all"]


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="promptkit playground",
        prog="promptkit",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging to promptkit.log)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Settings YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run a prompt demo")
    demo_parser.add_argument("kind", choices=DEMO_KINDS, help="Prompt kind, or 'all'")

    # Live output demos
    spinner_parser = subparsers.add_parser("spinner", help="Spinner demo")
    spinner_parser.add_argument("--seconds", type=float, default=2.0, help="Duration")

    draft_parser = subparsers.add_parser("draft", help="Concurrent draft lines demo")
    draft_parser.add_argument("--tasks", type=int, default=4, help="Number of tasks")
    draft_parser.add_argument("--seconds", type=float, default=2.0, help="Longest task duration")

    progress_parser = subparsers.add_parser("progress", help="Progress bar demo")
    progress_parser.add_argument("--steps", type=int, default=50, help="Number of steps")
    progress_parser.add_argument("--seconds", type=float, default=2.0, help="Duration")

    # Settings command
    settings_parser = subparsers.add_parser("settings", help="Show effective settings")
    settings_parser.add_argument("--init", metavar="PATH", help="Write a default settings file")

    args = parser.parse_args(argv)

    # NO_COLOR, FORCE_COLOR and PROMPTKIT_EDITOR may come from a project .env
    load_dotenv(find_dotenv(usecwd=True))

    # Debug records go to a file so they do not corrupt the live region
    if args.verbose:
        setup_logging("DEBUG", file="promptkit.log")
    else:
        setup_logging("WARNING")

    if args.config is not None:
        try:
            set_settings(PromptSettings.from_yaml(args.config))
        except (OSError, ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Failed to load {args.config}: {e}[/red]")
            return 1

    if args.command == "demo":
        return cmd_demo(args)
    elif args.command == "spinner":
        return cmd_spinner(args)
    elif args.command == "draft":
        return cmd_draft(args)
    elif args.command == "progress":
        return cmd_progress(args)
    elif args.command == "settings":
        return cmd_settings(args)

    parser.print_help()
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Run one prompt, or every prompt in turn, and show the answers."""
    configs = _demo_configs()
    kinds = list(configs) if args.kind == "all" else [args.kind]

    answers: list[tuple[str, Any]] = []
    try:
        for kind in kinds:
            answers.append((kind, asyncio.run(prompt(configs[kind]()))))
    except PromptCancelledError:
        console.print("[yellow]Cancelled[/yellow]")
        return 130
    except TerminalUnavailableError as e:
        console.print(f"[red]{e}[/red]")
        return 1

    table = Table(title="Answers")
    table.add_column("Prompt", style="cyan")
    table.add_column("Value")
    table.add_column("Type", style="dim")
    for kind, value in answers:
        table.add_row(kind, repr(value), type(value).__name__)
    console.print(table)
    return 0


def cmd_spinner(args: argparse.Namespace) -> int:
    """Spin while pretending to work through a few stages."""
    stages = ["Resolving dependencies", "Downloading", "Installing"]
    with Spinner(stages[0]) as sp:
        for stage in stages:
            sp.update(stage)
            time.sleep(args.seconds / len(stages))
    return 0


def cmd_draft(args: argparse.Namespace) -> int:
    """Run several fake tasks in threads, each reporting on its own line."""
    draft = Draft()

    def work(n: int, line: DraftLine) -> None:
        duration = random.uniform(args.seconds / 4, args.seconds)
        steps = 5
        for step in range(1, steps + 1):
            time.sleep(duration / steps)
            line.update(f"Task {n}: step {step}/{steps}")
        outcome = random.random()
        if outcome < 0.15:
            line.fail(f"Task {n}: failed")
        elif outcome < 0.3:
            line.warn(f"Task {n}: finished with warnings")
        else:
            line.done(f"Task {n}: done in {duration:.1f}s")

    # All lines exist before any task can finish and complete the draft
    lines = [draft.add_line(f"Task {n}: queued") for n in range(1, args.tasks + 1)]
    threads = [threading.Thread(target=work, args=(n, line)) for n, line in enumerate(lines, 1)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    draft.stop()
    return 0


def cmd_progress(args: argparse.Namespace) -> int:
    bar = ProgressBar(total=args.steps, message="Processing")
    for _ in range(args.steps):
        time.sleep(args.seconds / max(1, args.steps))
        bar.increment()
    bar.complete("Processed")
    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    """Show the effective settings, or write them to a new file."""
    settings = get_settings()

    if args.init:
        output_path = Path(args.init)
        if output_path.exists():
            console.print(f"[red]File already exists: {output_path}[/red]")
            return 1
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        console.print(f"[green]Created settings file: {output_path}[/green]")
        return 0

    console.print("[bold]Current Settings:[/bold]\n")
    console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())

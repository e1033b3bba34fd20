"""
Command-line front end for the tagging engine.

``stattaker validate`` checks a workflow definitions file;
``stattaker walk`` steps through one workflow interactively and prints the
create requests it would submit. Nothing is sent over the network.
"""

from __future__ import annotations

import json
import math
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from stattaker import __version__
from stattaker.application.engine import TaggingEngine
from stattaker.application.submission import SubmissionPlan, SubmissionService
from stattaker.domain.exceptions import ConfigurationError
from stattaker.domain.game_clock import format_timestamp
from stattaker.domain.models import Phase, WorkflowDefinition
from stattaker.infrastructure.persistence.memory import InMemoryEventStore
from stattaker.logging_setup import setup_logging
from stattaker.schemas import load_workflows

BACK = "b"
CANCEL = "c"


def _print_error(console: Console, message: str, hint: str | None = None) -> None:
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    console.print(Panel(content, title="Error", border_style="red"))


def _load_or_exit(console: Console, path: Path) -> list[WorkflowDefinition]:
    try:
        return load_workflows(path)
    except ConfigurationError as e:
        _print_error(console, str(e))
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="stattaker")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose (DEBUG) logging")
@click.option("--log-file", default=None, type=click.Path(), help="Path to log file")
def main(verbose: bool, log_file: str | None) -> None:
    """Guided video event tagging."""
    setup_logging("stattaker", log_file=log_file, verbose=verbose)


@main.command()
@click.argument("workflows_file", type=click.Path(path_type=Path))
def validate(workflows_file: Path) -> None:
    """Validate a workflow definitions file."""
    console = Console()
    workflows = _load_or_exit(console, workflows_file)

    table = Table(show_header=True, box=None)
    table.add_column("Workflow", style="cyan")
    table.add_column("Steps", justify="right")
    table.add_column("System", style="magenta")
    for workflow in workflows:
        table.add_row(
            workflow.name,
            str(len(workflow.steps)),
            "lineup" if workflow.system_reserved else "",
        )
    console.print(table)
    console.print(Panel(f"{len(workflows)} workflows OK", title="Success", border_style="green"))


@main.command()
@click.argument("workflows_file", type=click.Path(path_type=Path))
@click.option("--workflow", "workflow_name", required=True, help="Name of the workflow to walk")
@click.option("--timestamp", default=0.0, type=float, help="Video time in seconds")
@click.option("--breakdown-id", default="local", help="Breakdown id used in requests")
def walk(workflows_file: Path, workflow_name: str, timestamp: float, breakdown_id: str) -> None:
    """Answer a workflow's prompts and print the resulting requests."""
    console = Console()
    workflows = _load_or_exit(console, workflows_file)
    workflow = next((w for w in workflows if w.name == workflow_name), None)
    if workflow is None:
        names = ", ".join(w.name for w in workflows) or "(none)"
        _print_error(console, f"Workflow '{workflow_name}' not found", f"Available: {names}")
        sys.exit(1)

    engine = TaggingEngine(workflows)
    engine.set_video_timestamp(timestamp)
    engine.start_workflow(workflow, engine.video_timestamp)
    console.print(f"[bold]{workflow.name}[/bold] at {format_timestamp(timestamp)}")

    if not _drive(console, engine):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    service = SubmissionService(InMemoryEventStore())
    _print_plan(console, service.build_workflow_plan(engine))
    result = service.submit_workflow(engine, breakdown_id)
    console.print(
        Panel(
            f"Group {result.group_id} with {len(result.event_ids)} events",
            title="Submitted (dry run)",
            border_style="green",
        )
    )


def _drive(console: Console, engine: TaggingEngine) -> bool:
    """Prompt until the user confirms (True) or cancels (False)."""
    while True:
        phase = engine.phase
        if phase is Phase.IDLE:
            return False
        if phase is Phase.STEP and engine.current_step is not None:
            step = engine.current_step
            console.print(f"\n[bold]{step.prompt}[/bold]")
            for i, option in enumerate(step.options, 1):
                console.print(f"  {i}. {option.label}")
            choices = [str(i) for i in range(1, len(step.options) + 1)]
            answer = Prompt.ask("Choice", choices=choices + [BACK, CANCEL], console=console)
            if not _navigate(engine, answer):
                engine.select_option(step.options[int(answer) - 1])
        elif phase is Phase.PARTICIPANT:
            answer = Prompt.ask(
                f"{engine.participant_prompt or 'Who?'} (id, t:<team id>, blank for none)",
                default="",
                console=console,
            )
            if not _navigate(engine, answer):
                is_team = answer.startswith("t:")
                participant_id = answer[2:] if is_team else answer
                engine.select_participant(participant_id or None, participant_id or None, is_team)
        elif phase is Phase.VALUE:
            answer = Prompt.ask(engine.value_prompt or "Enter value", console=console)
            if not _navigate(engine, answer):
                value = _parse_value(answer)
                if value is None:
                    console.print("[red]Enter a number.[/red]")
                else:
                    engine.enter_value(value)
        elif phase is Phase.CONFIRMATION:
            _print_queue(console, engine)
            answer = Prompt.ask("Submit?", choices=["s", BACK, CANCEL], default="s", console=console)
            if not _navigate(engine, answer):
                return True
        else:
            return False


def _parse_value(answer: str) -> float | None:
    """Finite number typed by the user, or None."""
    try:
        value = float(answer)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _navigate(engine: TaggingEngine, answer: str) -> bool:
    if answer == BACK:
        engine.go_back()
        return True
    if answer == CANCEL:
        engine.cancel_workflow()
        return True
    return False


def _print_queue(console: Console, engine: TaggingEngine) -> None:
    table = Table(show_header=True, box=None)
    table.add_column("#", style="cyan")
    table.add_column("Event type", style="magenta")
    table.add_column("Participant")
    table.add_column("Value")
    for i, qe in enumerate(engine.queued_events, 1):
        participant = qe.participant_name or ""
        if qe.participant_is_team and participant:
            participant = f"{participant} (team)"
        table.add_row(
            str(i),
            qe.event_type_id,
            participant,
            "" if qe.value is None else str(qe.value),
        )
    console.print(table)


def _print_plan(console: Console, plan: SubmissionPlan) -> None:
    payload = {
        "event_group": plan.group.to_payload(),
        "events": [e.to_payload() for e in plan.events],
    }
    console.print_json(json.dumps(payload))


if __name__ == "__main__":
    main()

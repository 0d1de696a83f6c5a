from typing import List, Optional
import asyncio
import logging
import uuid

import typer
from typing_extensions import Annotated
from rich.console import Console
from rich.table import Table

from handoff_engine.client.handoff_engine import HandoffEngine
from handoff_engine.domains.enums import WorkflowStyle
from handoff_engine.domains.handoff import (
    HandoffContext,
    HandoffResult,
    SessionContext,
    UserPreferences,
)

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()


def _load_engine(config: Optional[str]) -> HandoffEngine:
    try:
        if config:
            return HandoffEngine(config_path=config)
        return HandoffEngine(config={})
    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


def render_result(result: HandoffResult) -> None:
    """Print a handoff analysis as a table."""
    if not result.success:
        console.print(
            f"[bold red]{result.error}:[/bold red] {result.message} "
            f"[dim](handoff {result.handoff_id})[/dim]"
        )
        return

    table = Table(title=f"Handoff {result.handoff_id}")
    table.add_column("Agent", style="bright_blue")
    table.add_column("Confidence", justify="right")
    table.add_column("Type")
    table.add_column("Minutes", justify="right")
    table.add_column("Reasoning")
    for rec in result.recommendations:
        marker = "* " if rec.agent_id == result.target_agent.agent_id else ""
        table.add_row(
            f"{marker}{rec.superhero_name} ({rec.agent_id})",
            str(rec.confidence),
            rec.handoff_type.value,
            str(rec.estimated_duration),
            rec.reasoning,
        )
    console.print(table)

    if result.workflow_chain:
        chain = result.workflow_chain
        console.print(
            f"[green]Workflow chain:[/green] {chain.name} "
            f"({' -> '.join(chain.agent_ids)}, ~{chain.estimated_duration} min)"
        )
    for excluded in result.excluded_agents:
        console.print(f"[yellow]Excluded {excluded.agent_id}:[/yellow] {excluded.reason}")
    if result.telemetry_error:
        console.print(f"[dim]{result.telemetry_error}[/dim]")


@app.command()
def analyze(
    source: Annotated[str, typer.Option(help="Agent handing off.")],
    intent: Annotated[str, typer.Option(help="What the user wants to do next.")],
    tier: Annotated[str, typer.Option(help="The user's access tier.")] = "starter",
    previous: Annotated[
        Optional[List[str]], typer.Option(help="Agent already visited (repeatable).")
    ] = None,
    prefer: Annotated[
        Optional[List[str]], typer.Option(help="Preferred agent (repeatable).")
    ] = None,
    avoid: Annotated[
        Optional[List[str]], typer.Option(help="Avoided agent (repeatable).")
    ] = None,
    style: Annotated[
        Optional[WorkflowStyle], typer.Option(help="Workflow style.")
    ] = None,
    user_id: Annotated[str, typer.Option(help="The user ID.")] = "cli_user",
    config: Annotated[
        Optional[str], typer.Option(help="Path to the configuration file.")
    ] = None,
):
    """
    Recommend which agent should take over from SOURCE.
    """
    engine = _load_engine(config)
    context = HandoffContext(
        source_agent_id=source,
        user_intent=intent,
        user_preferences=UserPreferences(
            preferred_agents=prefer or [],
            avoided_agents=avoid or [],
            workflow_style=style,
        ),
        session_context=SessionContext(
            user_id=user_id,
            session_id=f"cli_{uuid.uuid4().hex[:8]}",
            user_tier=tier,
            previous_agents=previous or [],
        ),
    )
    result = asyncio.run(engine.analyze(context))
    render_result(result)
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def agents(
    config: Annotated[
        Optional[str], typer.Option(help="Path to the configuration file.")
    ] = None,
):
    """
    List the agents in the catalog.
    """
    engine = _load_engine(config)
    table = Table(title="Agents")
    table.add_column("ID", style="bright_blue")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Tier")
    table.add_column("Capabilities")
    for agent in engine.list_agents():
        table.add_row(
            agent.id,
            agent.display_name,
            agent.category,
            agent.required_tier,
            ", ".join(agent.capabilities),
        )
    console.print(table)


if __name__ == "__main__":
    app()

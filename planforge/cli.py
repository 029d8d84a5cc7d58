# planforge/cli.py
"""
CLI interface for planforge.

Thin presentation layer over planforge.service. Rendered output goes to
stdout; progress, tables and logs go to stderr.
"""

import asyncio
from pathlib import Path

import typer

app = typer.Typer(
    name="planforge",
    help="Turn a project summary into a complete, quality-scored build specification.",
    no_args_is_help=True,
)

_PHASE_DESCRIPTIONS = {
    "research": "Researching features, stack and architecture...",
    "team": "Composing the agent team...",
    "tools": "Recommending tools and services...",
    "adrs": "Writing architecture decision records...",
    "diagrams": "Drawing diagrams...",
    "cost": "Estimating costs...",
    "risks": "Analyzing dependency risk...",
}


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _get_phase_description(phase: str) -> str:
    if phase.endswith("_complete"):
        return ""
    return _PHASE_DESCRIPTIONS.get(phase, phase)


def _load_settings(config_path: Path | None, api_key: str | None):
    """Load config, settle the API key and configure logging."""
    from planforge.config import load_config, resolve_api_key
    from planforge.logging_config import configure_logging

    config = resolve_api_key(load_config(config_path), override=api_key)
    configure_logging(config.output.verbosity)
    return config


def _print_report(report, console) -> None:
    from rich.table import Table

    table = Table(title="Quality report", show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Overall score", str(report.overall_score))
    table.add_row("Vague terms", str(len(report.vague_terms_found)))
    table.add_row("Errors", str(len(report.errors)))
    table.add_row("Warnings", str(len(report.warnings)))
    gate = "[green]passed[/green]" if report.passed_quality_gate else "[red]failed[/red]"
    table.add_row("Quality gate", gate)
    console.print(table)

    for error in report.errors:
        console.print(f"[red]{error.severity}[/red] {error.section}: {error.message}")
    for fix in report.required_fixes:
        console.print(f"[yellow]fix[/yellow] {fix}")


@app.command()
def plan(
    input_path: Path = typer.Argument(..., help="Project summary (JSON or YAML)", exists=True),
    enrichment: Path = typer.Option(None, "--enrichment", "-e", help="Enrichment file", exists=True),
    clarifications: Path = typer.Option(
        None, "--clarifications", help="Answered clarification questions", exists=True
    ),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Where to write the plan"),
    api_key: str = typer.Option(None, "--api-key", help="Anthropic API key override"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
    strict: bool = typer.Option(False, "--strict", help="Exit 2 when the quality gate fails"),
):
    """Generate a build specification and its decisions file."""
    from rich.console import Console
    from rich.status import Status

    from planforge.errors import PlannerError
    from planforge.llm import create_reasoning_client
    from planforge.service import (
        create_plan,
        load_clarifications,
        load_enrichment,
        load_summary,
        write_plan,
    )

    console = Console(stderr=True)
    try:
        config = _load_settings(config_path, api_key)
        summary = load_summary(input_path)
        enrichment_data = load_enrichment(enrichment) if enrichment else None
        answers = load_clarifications(clarifications) if clarifications else None
    except (PlannerError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    async def _plan():
        client = create_reasoning_client(config)
        mode = "remote reasoning" if client else "local heuristics"
        console.print(f"[dim]Planning '{summary.project_name}' with {mode}[/dim]")
        with Status("[dim]Starting...[/dim]", console=console, spinner="dots") as status:

            def _progress(progress: float, phase: str) -> None:
                desc = _get_phase_description(phase)
                if desc:
                    status.update(f"[dim]{desc} {progress * 100:.0f}%[/dim]")

            try:
                return await create_plan(
                    summary,
                    enrichment=enrichment_data,
                    clarifications=answers,
                    config=config,
                    client=client,
                    progress_callback=_progress,
                )
            finally:
                if client is not None:
                    await client.close()

    try:
        artifacts = _run(_plan())
    except PlannerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("\nCancelled.", err=True)
        raise typer.Exit(130)

    target = output_dir or Path(config.output.plans_dir)
    spec_path, decisions_path = write_plan(artifacts, target)
    _print_report(artifacts.report, console)
    typer.echo(str(spec_path))
    typer.echo(str(decisions_path))

    if strict and not artifacts.report.passed_quality_gate:
        raise typer.Exit(2)


@app.command()
def validate(
    spec: Path = typer.Argument(..., help="Build spec markdown", exists=True),
    decisions: Path = typer.Option(None, "--decisions", "-d", help="Decisions YAML", exists=True),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
):
    """Score an existing build spec; exits 1 when the quality gate fails."""
    from rich.console import Console

    from planforge.errors import PlannerError
    from planforge.planning.quality import QualityValidator

    try:
        config = _load_settings(config_path, None)
    except (PlannerError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    document = spec.read_text(encoding="utf-8")
    decisions_text = decisions.read_text(encoding="utf-8") if decisions else None
    validator = QualityValidator(config.quality.min_score, config.quality.max_vague_terms)
    report = validator.validate(document, decisions_text)

    if as_json:
        typer.echo(report.model_dump_json(by_alias=True, indent=2))
    else:
        _print_report(report, Console(stderr=True))
        typer.echo(f"score={report.overall_score} passed={report.passed_quality_gate}")

    if not report.passed_quality_gate:
        raise typer.Exit(1)


@app.command()
def questions(
    input_path: Path = typer.Argument(..., help="Project summary (JSON or YAML)", exists=True),
    enrichment: Path = typer.Option(None, "--enrichment", "-e", help="Enrichment file", exists=True),
    api_key: str = typer.Option(None, "--api-key", help="Anthropic API key override"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
):
    """Print clarifying questions that would sharpen the plan."""
    from planforge.errors import PlannerError
    from planforge.llm import create_reasoning_client
    from planforge.service import generate_questions, load_enrichment, load_summary

    try:
        config = _load_settings(config_path, api_key)
        summary = load_summary(input_path)
        enrichment_data = load_enrichment(enrichment) if enrichment else None
    except (PlannerError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    async def _questions():
        client = create_reasoning_client(config)
        try:
            return await generate_questions(summary, enrichment_data, config, client)
        finally:
            if client is not None:
                await client.close()

    try:
        result = _run(_questions())
    except PlannerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for i, question in enumerate(result, start=1):
        typer.echo(f"{i}. {question}")


@app.command("config")
def show_config(
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
):
    """Show the config file location and effective settings."""
    import yaml

    from planforge.config import get_config_path, load_config
    from planforge.errors import PlannerError

    try:
        config = load_config(config_path)
    except (PlannerError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    data = config.model_dump(mode="json")
    if data["anthropic"]["api_key"]:
        data["anthropic"]["api_key"] = data["anthropic"]["api_key"][:10] + "..."
    typer.echo(f"# {config_path or get_config_path()}")
    typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    app()

"""scenariogen CLI - compile scenario fixtures into test modules."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from scenariogen.compiler import check_output, compile_scenarios, write_output
from scenariogen.config import GeneratorConfig
from scenariogen.exceptions import ScenarioGenError
from scenariogen.scenarios import load_scenario_records, parse_batch

app = typer.Typer(
    name="scenariogen",
    help="Compile dependency-resolution scenarios into pytest test modules",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from scenariogen import __version__

        console.print(f"[bold]scenariogen[/bold] v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(error: ScenarioGenError) -> NoReturn:
    err_console.print(f"[bold red]error:[/bold red] {escape(str(error))}", highlight=False)
    raise typer.Exit(code=1)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """scenariogen - generated resolver tests from declarative scenarios."""
    pass


@app.command(name="generate")
def generate(
    sources: Annotated[
        list[Path],
        typer.Argument(help="Scenario files (JSON, YAML, TOML) or directories"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Generated module path (stdout when omitted)"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML generator configuration"),
    ] = None,
    exclude: Annotated[
        Optional[list[str]],
        typer.Option("--exclude", "-x", help="Scenario name to leave out (repeatable)"),
    ] = None,
    require_scenarios: Annotated[
        bool,
        typer.Option("--require-scenarios", help="Fail when no scenarios are found"),
    ] = False,
    check: Annotated[
        bool,
        typer.Option("--check", help="Exit 1 if the output file is missing or stale"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """Generate a test module from scenario fixtures.

    Examples:

        # Print the module
        scenariogen generate scenarios/

        # Write it, leaving one scenario out
        scenariogen generate scenarios/ -o tests/test_scenarios.py -x slow-case

        # Verify the checked-in module is current
        scenariogen generate scenarios/ -o tests/test_scenarios.py --check
    """
    _configure_logging(verbose)

    try:
        config = GeneratorConfig.from_yaml(config_file) if config_file else GeneratorConfig()
        if exclude:
            config.exclude.extend(exclude)
        if require_scenarios:
            config.require_scenarios = True

        source = ", ".join(str(path) for path in sources)
        text = compile_scenarios(load_scenario_records(sources), config, source)
    except ScenarioGenError as e:
        _fail(e)

    if check:
        if output is None:
            err_console.print("[bold red]error:[/bold red] --check requires --output")
            raise typer.Exit(code=2)
        if not check_output(output, text):
            err_console.print(f"[yellow]{escape(str(output))} is out of date[/yellow]")
            raise typer.Exit(code=1)
        console.print(f"[green]{escape(str(output))} is up to date[/green]")
        return

    if output is None:
        typer.echo(text, nl=False)
    else:
        write_output(output, text)
        console.print(f"Wrote [bold]{escape(str(output))}[/bold]")


@app.command(name="list")
def list_scenarios(
    sources: Annotated[
        list[Path],
        typer.Argument(help="Scenario files (JSON, YAML, TOML) or directories"),
    ],
):
    """List scenario names with their generated test function names."""
    try:
        scenarios = parse_batch(load_scenario_records(sources))
    except ScenarioGenError as e:
        _fail(e)

    for scenario in scenarios:
        typer.echo(f"{scenario.name}\t{scenario.function_name}")


if __name__ == "__main__":
    app()

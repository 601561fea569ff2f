"""namecheck CLI: check a configuration-management tree against the naming guide."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from namecheck import __version__
from namecheck.cli._helpers import console, err_console, fail, setup_logging
from namecheck.config import load_settings
from namecheck.errors import InvalidRoot, UnknownKind
from namecheck.pipeline import run_check
from namecheck.report import render_json, render_text
from namecheck.rules import load_rule_table

app = typer.Typer(
    name="namecheck",
    help="Naming and layout conformance checker for Ansible-style repositories.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"namecheck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V",
            help="Show version",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """namecheck: roles, playbooks, groups and variables named by the guide."""


@app.command()
def check(
    root: Annotated[Path, typer.Argument(help="Project root to scan")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Report format"),
    ] = OutputFormat.text,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write report to file (default: stdout)"),
    ] = None,
    cluster_prefix: Annotated[
        list[str] | None,
        typer.Option("--cluster-prefix", help="Extra cluster prefix marking specific groups"),
    ] = None,
    singular_word: Annotated[
        list[str] | None,
        typer.Option("--singular-word", help="Word to always treat as singular"),
    ] = None,
    plural_word: Annotated[
        list[str] | None,
        typer.Option("--plural-word", help="Word to always treat as plural"),
    ] = None,
    invariant_word: Annotated[
        list[str] | None,
        typer.Option("--invariant-word", help="Word accepted as singular and plural"),
    ] = None,
    jobs: Annotated[
        int, typer.Option("--jobs", "-j", min=1, help="Worker threads for validation")
    ] = 1,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Debug logging on stderr")
    ] = False,
) -> None:
    """Scan ROOT, validate every entity and print the report.

    Exit code: 0 clean, 1 violations or unresolved warnings, 2 error.
    """
    setup_logging(verbose)
    settings = load_settings(
        cluster_prefixes=cluster_prefix or (),
        singular_words=singular_word or (),
        plural_words=plural_word or (),
        invariant_words=invariant_word or (),
    )
    try:
        report = run_check(root, settings=settings, jobs=jobs)
    except InvalidRoot as e:
        fail(f"Invalid root {e}")
        raise typer.Exit(2) from None
    except UnknownKind as e:
        fail(f"Malformed rule table: {e}")
        raise typer.Exit(2) from None

    if output_format is OutputFormat.json:
        rendered = render_json(report)
    else:
        rendered = render_text(report)

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered)
        except OSError as e:
            fail(f"Cannot write {output}: {e.strerror or e}")
            raise typer.Exit(2) from None
        err_console.print(f"Report written to {output}", highlight=False)
    else:
        typer.echo(rendered, nl=False)

    raise typer.Exit(report.exit_code)


@app.command()
def rules() -> None:
    """List the built-in naming rules."""
    table = Table(title="Naming rules")
    table.add_column("Kind", style="cyan")
    table.add_column("Casing")
    table.add_column("Plurality", style="magenta")
    table.add_column("Prefix", style="green")
    table.add_column("Expected location")

    for rule in load_rule_table():
        table.add_row(
            rule.kind.value,
            rule.casing.value,
            rule.plurality.value,
            rule.prefix_pattern or "-",
            "\n".join(rule.expected_locations),
        )
    console.print(table)

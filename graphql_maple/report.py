"""Output formatting and reporting."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from . import utils
from .models import CallShape, FunctionSpec, InvalidOperation, MissingParams

console = Console()


def print_functions(specs: list[FunctionSpec]) -> None:
    """
    Print a table of generated functions.

    Args:
        specs: Function specs to list
    """
    table = Table(title="Generated functions", title_style="bold cyan")
    table.add_column("Function", style="cyan")
    table.add_column("Kind")
    table.add_column("Field", style="dim")
    table.add_column("Required params")
    table.add_column("Deprecated")

    for spec in specs:
        deprecated = f"[yellow]⚠ {escape(spec.deprecation_reason or '')}[/yellow]" if spec.deprecated else ""
        table.add_row(
            spec.generated_identifier,
            spec.operation.value,
            spec.source_name,
            ", ".join(spec.required_argument_names),
            deprecated,
        )

    console.print(table)
    console.print(f"\n[dim]{len(specs)} functions[/dim]\n")


def print_help(spec: FunctionSpec) -> None:
    """Print the generated help text for one function."""
    args = "(fields)" if spec.shape is CallShape.ARGUMENTLESS_QUERY else "(params, fields)"
    console.print(Panel(Text(spec.help_text.rstrip()), title=f"{spec.generated_identifier}{args}", title_align="left"))


def print_operation(text: str, operation: str) -> None:
    """Print a rendered operation with GraphQL highlighting."""
    console.print(f"\n[bold cyan]{operation}[/bold cyan]\n")
    console.print(Syntax(text, "graphql", word_wrap=True))
    console.print()


def emit_result(result: Any, fmt: str) -> bool:
    """
    Output the result of a generated-function call.

    Args:
        result: Adapter payload or failure value
        fmt: Output format ("json" or "console")

    Returns:
        True if the call succeeded (no failure value and no GraphQL errors)
    """
    if isinstance(result, (MissingParams, InvalidOperation)):
        if fmt == "json":
            print(utils.to_json(result.to_dict()))
        else:
            console.print(f"[red]✖ {escape(result.message)}[/red]")
        return False

    if fmt == "json":
        print(utils.to_json(result))
    else:
        console.print_json(utils.to_json(result))

    return not (isinstance(result, dict) and result.get("errors"))


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, config init).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()

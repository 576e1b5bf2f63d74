"""CLI for graphql-maple."""

import json
import logging
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import config, schema_loader, utils
from .adapter import RecordingAdapter
from .client import Client
from .models import CallShape
from .report import emit_result, print_functions, print_help, print_kv, print_operation

app = typer.Typer(help="Generate GraphQL client functions from schema introspection")
schema_app = typer.Typer(help="Schema operations")
app.add_typer(schema_app, name="schema")

console = Console()
state = {"config_path": None, "debug": False}


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file path"),
    debug: bool = typer.Option(False, "--debug", help="Re-raise errors with a traceback"),
):
    state["config_path"] = config_path
    state["debug"] = debug
    cfg = config.load(config_path)
    setup_logging("INFO" if verbose else cfg.log_level)


def _fail(e: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if state["debug"]:
        raise e
    raise typer.Exit(1)


def _load_schema_json(url: Optional[str], schema: Optional[str], cfg: config.Config, token: Optional[str] = None) -> dict:
    profile = schema_loader.load_schema(
        url=url or cfg.default_url, schema_file=schema, cfg=cfg, allow_cache=True, token=token
    )
    return profile.schema_json


def _collect_params(params: List[str], params_json: Optional[str]) -> dict:
    values = {}
    if params_json:
        values.update(json.loads(params_json))
    values.update(utils.parse_params(params))
    return values


def _invoke(client: Client, name: str, values: dict, fields: str):
    fn = client.get(name)
    if fn.spec.shape is CallShape.ARGUMENTLESS_QUERY:
        return fn(fields)
    return fn(values, fields)


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    out: Optional[str] = typer.Option(None, help="Output file path"),
):
    """Fetch and cache the GraphQL schema."""
    try:
        cfg = config.load(state["config_path"])
        full_url = url or cfg.default_url

        if not full_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_schema(url=full_url, cfg=cfg, allow_cache=True, refresh=True, token=token)

        # If custom output path specified, write just the schema JSON
        if out:
            utils.write_json(out, profile.schema_json)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.url, cfg)

        print_kv("Schema pulled", {"url": profile.url, "hash": profile.hash, "path": path})
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)


@app.command("functions")
def functions_cmd(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
):
    """List the functions generated from a schema."""
    try:
        cfg = config.load(state["config_path"])
        client = Client.from_introspection(_load_schema_json(url, schema, cfg), RecordingAdapter())
        print_functions(client.functions())
    except Exception as e:
        _fail(e)


@app.command("describe")
def describe_cmd(
    name: str = typer.Argument(..., help="Function or field name"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
):
    """Show the generated help for one function."""
    try:
        cfg = config.load(state["config_path"])
        client = Client.from_introspection(_load_schema_json(url, schema, cfg), RecordingAdapter())
        print_help(client.get(name).spec)
    except Exception as e:
        _fail(e)


@app.command("render")
def render_cmd(
    name: str = typer.Argument(..., help="Function or field name"),
    param: List[str] = typer.Option([], "--param", "-p", help="Argument as key=value (repeatable)"),
    params_json: Optional[str] = typer.Option(None, "--params-json", "-j", help="Arguments as a JSON object"),
    fields: str = typer.Option("", "--fields", "-f", help="Field selection"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
    validate: bool = typer.Option(False, help="Validate the operation against the schema"),
):
    """Render an operation without sending it."""
    try:
        cfg = config.load(state["config_path"])
        adapter = RecordingAdapter()
        client = Client.from_introspection(
            _load_schema_json(url, schema, cfg), adapter, validate=validate or cfg.validate_operations
        )
        result = _invoke(client, name, _collect_params(param, params_json), fields)
    except Exception as e:
        _fail(e)

    if adapter.queries or adapter.mutations:
        operation = "Query" if adapter.queries else "Mutation"
        print_operation((adapter.queries or adapter.mutations)[0], operation)
        return

    emit_result(result, "console")
    raise typer.Exit(2)


@app.command("call")
def call_cmd(
    name: str = typer.Argument(..., help="Function or field name"),
    param: List[str] = typer.Option([], "--param", "-p", help="Argument as key=value (repeatable)"),
    params_json: Optional[str] = typer.Option(None, "--params-json", "-j", help="Arguments as a JSON object"),
    fields: str = typer.Option("", "--fields", "-f", help="Field selection"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
    validate: Optional[bool] = typer.Option(None, help="Validate the operation against the schema"),
    output: str = typer.Option("console", help="Output format (console|json)"),
):
    """Execute an operation against the endpoint."""
    try:
        cfg = config.load(state["config_path"])
        client = Client.connect(url=url, cfg=cfg, schema_file=schema, token=token, validate=validate)
        result = _invoke(client, name, _collect_params(param, params_json), fields)
    except Exception as e:
        _fail(e)

    if not emit_result(result, output):
        raise typer.Exit(2)


@app.command("init-config")
def init_config_cmd(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example config file."""
    try:
        written = config.create_example_config(path or state["config_path"])
        print_kv("Config written", {"path": written})
    except Exception as e:
        _fail(e)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

"""Command-line entry point run by protoc as `protoc-gen-pool`."""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from protoc_gen_pool import __version__
from protoc_gen_pool.generator.naming import pool_names
from protoc_gen_pool.generator.plugin import (
    GenerationResult,
    ProtocolDecodeError,
    encode_response,
    generate,
    read_request,
)

# stdout carries the response, everything human readable goes to stderr
console = Console(stderr=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", message="%(prog)s v%(version)s")
def cli() -> None:
    """Generate object pools for protocol buffer messages.

    Reads a CodeGeneratorRequest from stdin and writes a
    CodeGeneratorResponse to stdout. Options are passed by protoc as the
    request parameter, e.g. `--pool_opt=lang=go,paths=source_relative`.
    """
    prog = click.get_current_context().find_root().info_name

    try:
        request = read_request(click.get_binary_stream("stdin").read())
    except ProtocolDecodeError as e:
        _fail(prog, str(e))

    result = generate(request)

    if result.ok and result.options.report == "table":
        _output_table(result)
    elif result.ok and result.options.report == "json":
        _output_json(result)

    try:
        stdout = click.get_binary_stream("stdout")
        stdout.write(encode_response(result))
        stdout.flush()
    except OSError as e:
        _fail(prog, f"failed to write response: {e}")


def _fail(prog: str | None, message: str) -> NoReturn:
    console.print(f"[bold red]{escape(prog or 'protoc-gen-pool')}:[/bold red] {escape(message)}")
    sys.exit(1)


def _output_json(result: GenerationResult) -> None:
    """Dump the descriptor models as JSON."""
    data = [schema.to_dict() for schema in result.schemas]
    click.echo(json.dumps(data, indent=2), err=True)


def _output_table(result: GenerationResult) -> None:
    """Print the generated pools using rich text formatting."""
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("File", style="white")
    table.add_column("Message", style="cyan")
    table.add_column("Pool", style="yellow")
    table.add_column("Get", style="green")
    table.add_column("Put", style="green")
    table.add_column("Fields", style="dim", justify="right")

    for schema, generated in zip(result.schemas, result.files):
        for message in schema.messages:
            pool = pool_names(message)
            table.add_row(
                generated.name,
                message.full_name,
                pool.pool,
                pool.getter,
                pool.putter,
                str(len(message.fields)),
            )

    console.print(f"[bold cyan]Pools ({result.options.lang})[/bold cyan]")
    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

from pathlib import Path
from typing import NoReturn

import orjson
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spisu.batch import build_records, load_batch
from spisu.codec.numeric import SignMode
from spisu.errors import SpisuError
from spisu.layouts.registry import REGISTRIES, SchemaRegistry, parse_record
from spisu.logging_setup import configure_logging

app = typer.Typer(help="Encode and decode 80-column SPISU payment records.")
console = Console()


def _registry(family: str) -> SchemaRegistry:
    try:
        return REGISTRIES[family.lower()]
    except KeyError:
        raise typer.BadParameter(
            f"Unknown layout family '{family}'. Choose from {sorted(REGISTRIES)}."
        ) from None


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error[/] {escape(message)}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (DEBUG, INFO, WARNING...). Defaults to SPISU_LOG_LEVEL."
    ),
) -> None:
    configure_logging(log_level)


@app.command()
def layouts(
    family: str = typer.Option("export", "--family", help="Layout family: export | returns."),
) -> None:
    """Show the column layout of every record shape in a family."""
    registry = _registry(family)
    for schema in registry:
        table = Table(title=f"{schema.name} (type {schema.type_code})")
        table.add_column("field")
        table.add_column("columns")
        table.add_column("type")
        table.add_column("width", justify="right")
        table.add_column("format")
        for name, descriptor in schema.fields.items():
            fmt = []
            if descriptor.date:
                fmt.append("yymmdd")
            if descriptor.scale:
                fmt.append(f"{descriptor.scale} decimals")
            if descriptor.sign is not SignMode.NONE:
                fmt.append(f"sign: {descriptor.sign.value}")
            table.add_row(
                name,
                f"{descriptor.start}-{descriptor.end}",
                descriptor.kind.value,
                str(descriptor.width),
                ", ".join(fmt),
            )
        console.print(table)


@app.command()
def decode(
    input: Path = typer.Argument(..., help="Payment file with one 80-column record per line."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the decoded JSON."
    ),
    family: str = typer.Option("export", "--family", help="Layout family: export | returns."),
    encoding: str = typer.Option("latin-1", "--encoding", help="Text encoding of the file."),
) -> None:
    """Decode every record of a payment file into JSON."""
    registry = _registry(family)
    if not input.is_file():
        raise typer.BadParameter(f"Input file not found: {input}")

    payload = []
    # only LF/CRLF end a record; other control characters belong to field text
    with input.open(encoding=encoding, newline="") as fh:
        lines = [line[:-1] if line.endswith("\r") else line for line in fh.read().split("\n")]
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = parse_record(line, registry)
            fields = record.to_dict()
        except SpisuError as exc:
            _fail(f"line {number}: {exc}")
        payload.append(
            {
                "line": number,
                "layout": record.schema.name,
                "type_code": record.type_code,
                "fields": fields,
            }
        )

    data = orjson.dumps(payload, option=orjson.OPT_INDENT_2, default=str)
    if output:
        output.write_bytes(data)
        console.print(f"[bold green]Wrote[/] {len(payload)} decoded records to {output}")
    else:
        typer.echo(data.decode())


@app.command()
def encode(
    batch: Path = typer.Argument(..., help="YAML or JSON batch describing the records."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the rendered lines."
    ),
    crlf: bool = typer.Option(False, "--crlf", help="Terminate lines with CRLF."),
    encoding: str = typer.Option("latin-1", "--encoding", help="Text encoding of the output."),
) -> None:
    """Render the records of a batch file as 80-column lines."""
    if not batch.is_file():
        raise typer.BadParameter(f"Batch file not found: {batch}")
    try:
        records = build_records(load_batch(batch))
    except SpisuError as exc:
        _fail(str(exc))

    lines = [record.render() for record in records]
    if output:
        newline = "\r\n" if crlf else "\n"
        try:
            output.write_text(
                "".join(line + newline for line in lines), encoding=encoding, newline=""
            )
        except UnicodeEncodeError as exc:
            _fail(f"cannot write {exc.object[exc.start : exc.end]!r} as {encoding}")
        console.print(f"[bold green]Wrote[/] {len(lines)} records to {output}")
    else:
        for line in lines:
            typer.echo(line)


if __name__ == "__main__":
    app()

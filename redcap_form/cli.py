"""CLI for redcap-form."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from redcap_form import __version__
from redcap_form.dictionary import (
    DataDictionary,
    DictionaryLoader,
    DictionaryNotFoundError,
    DictionaryValidationError,
)
from redcap_form.form import FieldNotFoundError, Form
from redcap_form.io import read_jsonl, write_jsonl

app = typer.Typer(
    name="redcap-form",
    help="Decode REDCap survey responses into typed values.",
    no_args_is_help=True,
)
console = Console()

DictionaryOption = Annotated[
    Path,
    typer.Option(
        "--dictionary",
        "-d",
        envvar="REDCAP_FORM_DICTIONARY",
        help="Data dictionary (.json metadata export or .csv download)",
    ),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"redcap-form version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """redcap-form: Typed decoding of REDCap survey responses."""
    pass


def _load_dictionary(path: Path) -> DataDictionary:
    try:
        return DictionaryLoader().load(path)
    except (DictionaryNotFoundError, DictionaryValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _print_diagnostics(form: Form) -> None:
    for warning in form.diagnostics.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning.message}")


@app.command()
def fields(
    dictionary: DictionaryOption,
    instrument: Annotated[
        str | None,
        typer.Option("--instrument", "-i", help="Only list fields of this instrument"),
    ] = None,
) -> None:
    """List fields with their resolved decoding variant and associated fields."""
    form = Form(_load_dictionary(dictionary))

    table = Table(title=f"Fields ({instrument})" if instrument else "Fields")
    table.add_column("Field")
    table.add_column("Instrument")
    table.add_column("Declared type")
    table.add_column("Variant")
    table.add_column("Associated fields")

    for field in form.fields():
        if instrument and field.definition.form_name != instrument:
            continue
        table.add_row(
            field.name,
            field.definition.form_name,
            field.definition.field_type,
            field.field_type.value,
            ", ".join(f.name for f in field.associated_fields),
        )

    console.print(table)
    _print_diagnostics(form)


@app.command()
def decode(
    dictionary: DictionaryOption,
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file of response records"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output JSONL file of decoded records"),
    ],
    field_names: Annotated[
        list[str] | None,
        typer.Option("--field", "-f", help="Field to decode (repeatable, default: all)"),
    ] = None,
) -> None:
    """Decode response records and write one JSON object per record."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    form = Form(_load_dictionary(dictionary))
    selected = field_names or None

    console.print(f"[bold]redcap-form[/bold] v{__version__}")
    console.print(f"  Dictionary: {dictionary} ({len(form.data_dictionary)} fields)")
    console.print(f"  Input: {input_path}")
    console.print(f"  Output: {output_path}")

    try:
        decoded = [form.decode(record, selected) for record in read_jsonl(input_path)]
    except FieldNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error reading input:[/red] {e}")
        raise typer.Exit(1)

    written = write_jsonl(output_path, decoded)
    _print_diagnostics(form)
    console.print(f"\n[green]Decoded {written} records[/green]")


if __name__ == "__main__":
    app()

from __future__ import annotations

import sys
import json
import pathlib
from typing import Optional
from enum import Enum

import click
import typer
import structlog
from rich.console import Console
from rich.table import Table

from .config import load_config, RfcmxConfig
from .engine.batch import process_csv
from .engine.generator import PersonName, TaxIdGenerator
from .engine.scanner import Scanner, ScanResult
from .engine.validation import detect_kind, validate_identifier
from .errors import IdentifierError

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="rfcmx — Mexican RFC generator and RFC/CURP/NSS validator")


class Kind(str, Enum):
    rfc = "RFC"
    curp = "CURP"
    nss = "NSS"


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"rfcmx {__version__}")
        raise typer.Exit()


def _config() -> RfcmxConfig:
    return click.get_current_context().obj["config"]


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to rfcmx.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    ctx.obj = {"config": load_config(config), "verbose": verbose}
    if verbose:
        log.info("verbose_enabled")


@app.command()
def generate(
    nombres: str = typer.Argument(..., help="Given name(s)"),
    paterno: str = typer.Option("", "--paterno", "-p", help="Paternal surname"),
    materno: str = typer.Option("", "--materno", "-m", help="Maternal surname"),
    fecha: str = typer.Option(..., "--fecha", "-f", help="Birth date: MM/DD/YYYY, YYYY-MM-DD, DD/MM/YYYY, MM-DD-YYYY or DD-MM-YYYY"),
    parts: bool = typer.Option(False, "--parts", help="Show each segment of the RFC"),
):
    """Generate the RFC of an individual."""
    try:
        tax_id = TaxIdGenerator(_config()).build(PersonName(nombres, paterno, materno), fecha)
    except IdentifierError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise typer.Exit(code=1)

    if click.get_current_context().obj.get("verbose"):
        log.info("tax_id_generated", rfc=tax_id.value)

    if parts:
        table = Table(title=tax_id.value)
        table.add_column("segment")
        table.add_column("value")
        table.add_row("letters", tax_id.letters)
        table.add_row("birth date", tax_id.birth_date)
        table.add_row("homoclave", tax_id.homoclave)
        table.add_row("check digit", tax_id.check_digit)
        console.print(table)
    else:
        console.print(tax_id.value)


@app.command()
def validate(
    candidate: str = typer.Argument(..., help="RFC, CURP or NSS to check"),
    kind: Optional[Kind] = typer.Option(None, "--kind", "-k", help="Force the identifier kind", case_sensitive=False),
):
    """Validate an identifier and print the result as JSON."""
    result = validate_identifier(candidate, kind.value if kind else None, _config())
    if click.get_current_context().obj.get("verbose"):
        log.info("identifier_validated", kind=result.kind.value, valid=result.valid)
    sys.stdout.write(json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n")
    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def detect(candidate: str = typer.Argument(..., help="Text to classify")):
    """Print the structural kind of an identifier (checksums not consulted)."""
    console.print(detect_kind(candidate).value)


@app.command()
def scan(
    src: pathlib.Path = typer.Argument(..., exists=True, help="File or directory to scan"),
    only_valid: bool = typer.Option(False, "--only-valid", help="Report only identifiers that pass validation"),
):
    """Find RFC, CURP and NSS identifiers in files."""
    result: ScanResult = Scanner(_config(), only_valid=only_valid).scan_path(src)
    for finding in result.findings:
        for s in finding.spans:
            status = "[green]valid[/green]" if s.valid else "[red]invalid[/red]"
            console.print(f"{finding.path}:{s.start} {s.type} {s.text} {status}")
    console.print(f"Scanned {result.files} files, {result.identifiers} identifiers found ({result.valid} valid)")
    log.info("scan_complete", files=result.files, identifiers=result.identifiers, valid=result.valid)


@app.command()
def batch(
    src: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with nombres,paterno,materno,fecha"),
    out: Optional[pathlib.Path] = typer.Option(None, "--out", help="Destination CSV (stdout when omitted)"),
):
    """Generate RFCs for every row of a CSV file."""
    with src.open(newline="", encoding="utf-8") as fin:
        try:
            if out:
                out.parent.mkdir(parents=True, exist_ok=True)
                with out.open("w", newline="", encoding="utf-8") as fout:
                    counts = process_csv(fin, fout, _config())
            else:
                counts = process_csv(fin, sys.stdout, _config())
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=1)

    log.info("batch_complete", **counts)
    if out:
        console.print(f"[green]Batch complete[/green] → {out} ({counts['rows']} rows, {counts['errors']} errors)")

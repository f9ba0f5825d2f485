"""vcf-extensions: decode VCF annotation fields into typed records."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigValidationError, DecodeConfig, load_config
from .extensions import extend_variant, get_extension
from .extensions.ensembl_vep import COERCION_TABLE, EnsemblVepExtension, Schema
from .extensions.ensembl_vep.fields import canonical_name
from .vcf_parser import iter_variants, read_header

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="vcf-extensions", help="Decode VCF annotation fields into typed records"
)
console = Console(stderr=True)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, default_level: str = "INFO") -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, default_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vcf_extensions").setLevel(level)


def _load_decode_config(config_file: Path | None, info_key: str | None) -> DecodeConfig:
    overrides = {"info_key": info_key} if info_key else None
    if config_file is None:
        return DecodeConfig(**(overrides or {}))
    return load_config(config_file, overrides)


@app.command()
def decode(
    vcf_path: Path = typer.Argument(..., help="Path to annotated VCF file (.vcf, .vcf.gz)"),
    info_key: Annotated[
        str | None, typer.Option("--info-key", "-k", help="INFO key holding annotations")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-l", help="Stop after this many variants")
    ] = None,
    include_unannotated: bool = typer.Option(
        False, "--all", "-a", help="Also emit variants without annotations"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Decode annotations for every variant and print one JSON object per line."""
    try:
        config = _load_decode_config(config_file, info_key)
    except (FileNotFoundError, ConfigValidationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    setup_logging(verbose, quiet, config.log_level)
    include_unannotated = include_unannotated or config.include_unannotated

    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    extensions = []
    for name in config.extensions:
        options = {"info_key": config.info_key} if name == "ensembl_vep" else {}
        extensions.append(get_extension(name, **options))
    logger.debug("Decoding %s with %s", vcf_path, ", ".join(config.extensions))

    try:
        header, variants = iter_variants(vcf_path)
    except OSError as e:
        console.print(f"[red]Error: Could not read {vcf_path}: {e}[/red]")
        raise typer.Exit(1) from None

    total = 0
    decoded = 0
    for variant in variants:
        if limit is not None and total >= limit:
            break
        total += 1

        result = extend_variant(variant, header, extensions)
        record = {
            "chrom": variant.CHROM,
            "pos": variant.POS,
            "ref": variant.REF,
            "alt": list(variant.ALT),
        }
        if result.success:
            decoded += 1
            record.update(result.to_dict())
        elif include_unannotated:
            record.update({"extension": None, "reason": result.reason.value})
        else:
            continue
        typer.echo(json.dumps(record, default=str))

    if not quiet:
        console.print(f"[green]✓[/green] Decoded {decoded:,} of {total:,} variants")


@app.command()
def schema(
    vcf_path: Path = typer.Argument(..., help="Path to annotated VCF file"),
    info_key: Annotated[
        str, typer.Option("--info-key", "-k", help="INFO key holding annotations")
    ] = "CSQ",
) -> None:
    """Show the annotation columns declared by a VCF header."""
    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    try:
        header = read_header(vcf_path)
    except OSError as e:
        console.print(f"[red]Error: Could not read {vcf_path}: {e}[/red]")
        raise typer.Exit(1) from None

    resolved = EnsemblVepExtension(info_key=info_key).resolve(header)

    if not isinstance(resolved, Schema):
        console.print(f"[red]Error: {resolved.message} ({resolved.reason.value})[/red]")
        raise typer.Exit(1)

    table = Table(title=f"INFO/{info_key} columns")
    table.add_column("#", justify="right")
    table.add_column("Column")
    table.add_column("Status")
    table.add_column("Output")

    for index, name in enumerate(resolved.fields):
        column = COERCION_TABLE.get(canonical_name(name))
        if column is None:
            status, output = "[yellow]unknown[/yellow]", ""
        elif column.skipped:
            status, output = "[dim]skipped[/dim]", ""
        else:
            status = "[green]decoded[/green]"
            output = ", ".join(
                f"{rule.frequency_group}.{rule.target}" if rule.frequency_group else rule.target
                for rule in column.rules
            )
        table.add_row(str(index), name, status, output)

    Console().print(table)


@app.command()
def fields() -> None:
    """List the VEP columns this decoder understands."""
    table = Table(title="Ensembl VEP coercion table")
    table.add_column("Column")
    table.add_column("Layout")
    table.add_column("Kind")
    table.add_column("Output")

    for name, column in COERCION_TABLE.items():
        if column.skipped:
            continue
        for rule in column.rules:
            target = (
                f"{rule.frequency_group}.{rule.target}" if rule.frequency_group else rule.target
            )
            table.add_row(name, column.layout.value, rule.kind.value, target)

    Console().print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

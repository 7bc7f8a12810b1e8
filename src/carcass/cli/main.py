"""Typer CLI for carcass configurations."""

import json
from pathlib import Path
from typing import Annotated

import typer

from carcass.application import ConfigurationOutput, ResolveConfigurationCommand
from carcass.application.config import (
    ConfigError,
    domain_to_config,
    load_config,
    load_pricing,
    pricing_to_parameters,
    resolve_socle_height,
    save_config,
)
from carcass.cli.commands import display_load_error, validate_command
from carcass.domain import (
    DimensionError,
    Dimensions,
    Envelope,
    SocleKind,
    ZoneKind,
    new_tree,
    split,
)
from carcass.domain.services import PricingEngine
from carcass.infrastructure import PriceBreakdownFormatter, SegmentTableFormatter
from carcass.infrastructure.exporters import (
    ExporterRegistry,
    ExportManager,
    UnknownFormatError,
    quote_to_dict,
    segment_to_dict,
)

app = typer.Typer(
    name="carcass",
    help="Partition furniture carcasses into panels and price them.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _resolve(
    config_file: Path,
    pricing_file: Path | None = None,
    include_price: bool = True,
) -> ConfigurationOutput:
    """Load a configuration and resolve it, exiting with code 1 on errors."""
    try:
        config = load_config(config_file)
        pricing = load_pricing(pricing_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    command = ResolveConfigurationCommand(
        pricing_engine=PricingEngine(pricing_to_parameters(pricing))
    )
    result = command.execute(config, include_price=include_price)

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    for correction in result.corrections:
        typer.echo(f"Warning: corrected {correction}", err=True)
    return result


def _check_format(output_format: str) -> None:
    if output_format not in ("table", "json"):
        typer.echo(f"Unknown format: {output_format}. Use 'table' or 'json'.", err=True)
        raise typer.Exit(code=1)


@app.command()
def segments(
    config_file: Annotated[
        Path, typer.Argument(help="Path to the JSON configuration file")
    ],
    visible_only: Annotated[
        bool,
        typer.Option("--visible-only", help="Skip deleted and auto-hidden segments"),
    ] = False,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table or json")
    ] = "table",
) -> None:
    """List the panel segments of a configuration."""
    _check_format(output_format)
    result = _resolve(config_file, include_price=False)
    listed = result.visible_segments if visible_only else result.segments

    if output_format == "json":
        data = [segment_to_dict(segment, result.visibility) for segment in listed]
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(SegmentTableFormatter().format(listed, result.visibility))


@app.command()
def price(
    config_file: Annotated[
        Path, typer.Argument(help="Path to the JSON configuration file")
    ],
    pricing_file: Annotated[
        Path | None,
        typer.Option("--pricing", "-p", help="Path to a pricing parameters JSON file"),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table or json")
    ] = "table",
) -> None:
    """Price a configuration with its breakdown."""
    _check_format(output_format)
    result = _resolve(config_file, pricing_file)
    if result.quote is None:
        typer.echo("Error: the configuration could not be priced", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        typer.echo(json.dumps(quote_to_dict(result.quote), indent=2))
    else:
        typer.echo(PriceBreakdownFormatter().format(result.quote))


@app.command()
def describe(
    config_file: Annotated[
        Path, typer.Argument(help="Path to the JSON configuration file")
    ],
) -> None:
    """Print the compact descriptor of a configuration."""
    result = _resolve(config_file, include_price=False)
    typer.echo(result.descriptor)


@app.command()
def export(
    config_file: Annotated[
        Path, typer.Argument(help="Path to the JSON configuration file")
    ],
    formats: Annotated[
        str,
        typer.Option(
            "--formats",
            help="Comma-separated export formats: json,svg,dxf,stl (or 'all')",
        ),
    ] = "all",
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Output directory for exported files"),
    ] = Path("."),
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Base name for exported files"),
    ] = None,
) -> None:
    """Export a configuration to one or more file formats."""
    try:
        requested = ExporterRegistry.select(formats)
    except UnknownFormatError as e:
        typer.echo(f"Unknown formats: {', '.join(e.unknown) or formats}", err=True)
        typer.echo(f"Available formats: {', '.join(e.available)}", err=True)
        raise typer.Exit(code=1)

    result = _resolve(config_file)
    manager = ExportManager(output_dir)
    written = manager.export_all(requested, result, project_name or config_file.stem)
    for format_name, path in written.items():
        typer.echo(f"{format_name}: {path}")


@app.command()
def init(
    output_file: Annotated[
        Path, typer.Argument(help="Path of the configuration file to create")
    ],
    width: Annotated[float, typer.Option("--width", "-w", help="Outer width in mm")],
    height: Annotated[float, typer.Option("--height", "-h", help="Outer height in mm")],
    depth: Annotated[float, typer.Option("--depth", "-d", help="Outer depth in mm")],
    columns: Annotated[
        int, typer.Option("--columns", "-c", min=1, help="Number of equal columns")
    ] = 1,
    rows: Annotated[
        int, typer.Option("--rows", "-r", min=1, help="Number of equal rows per column")
    ] = 1,
    thickness: Annotated[
        float, typer.Option("--thickness", "-t", help="Board thickness in mm")
    ] = 19.0,
    socle: Annotated[
        SocleKind, typer.Option("--socle", help="Base under the carcass")
    ] = SocleKind.NONE,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing file")
    ] = False,
) -> None:
    """Create a configuration with an even grid of columns and rows."""
    if output_file.exists() and not force:
        typer.echo(f"Error: {output_file} exists, use --force to overwrite", err=True)
        raise typer.Exit(code=1)

    try:
        envelope = Envelope(
            dimensions=Dimensions(width, height, depth),
            thickness=thickness,
            socle_height=resolve_socle_height(socle, None),
        )
    except DimensionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    tree = new_tree()
    column_ids = [tree.id]
    if columns > 1:
        tree = split(tree, tree.id, ZoneKind.VERTICAL, columns)
        column_ids = [child.id for child in tree.children]
    if rows > 1:
        for column_id in column_ids:
            tree = split(tree, column_id, ZoneKind.HORIZONTAL, rows)

    config = domain_to_config(tree, envelope, socle=socle)
    save_config(config, output_file)
    typer.echo(f"Created {output_file} ({len(tree.leaves())} zone(s))")


if __name__ == "__main__":
    app()

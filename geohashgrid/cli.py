"""CLI module for encoding, decoding and covering areas with geohashes."""

import logging
from typing import Annotated, NoReturn, Optional

import click
import typer

from geohashgrid._constants import MAX_BINARY_PRECISION, MAX_CHARACTER_PRECISION
from geohashgrid._exceptions import (
    CoordinateOutOfRangeError,
    InvalidGeohashError,
    PrecisionOutOfRangeError,
)
from geohashgrid.bounding_box import BoundingBox
from geohashgrid.coordinate import Coordinate
from geohashgrid.geohash_cell import GeohashCell
from geohashgrid.precision import Precision

app = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from geohashgrid import __app_name__, __version__

        typer.echo(f"{__app_name__} {__version__}")
        raise typer.Exit()


def _print_error_and_exit(error: Exception) -> NoReturn:
    from rich.console import Console

    err_console = Console(stderr=True)
    err_console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(code=1) from None


def _cell_label(cell: GeohashCell, raw_bits: bool = False) -> str:
    # cells below 3 bits per axis don't fill a single base32 character
    if raw_bits or cell.precision.character_precision() == 0:
        return hex(cell.bits)
    return cell.to_string()


class BboxParser(click.ParamType):  # type: ignore
    """Parser for bounding box in minx,miny,maxx,maxy form."""

    name = "BBOX"

    def convert(self, value, param=None, ctx=None):  # type: ignore
        """Convert parameter value."""
        if isinstance(value, BoundingBox):
            return value
        try:
            minx, miny, maxx, maxy = (float(x.strip()) for x in value.split(","))
            return BoundingBox.enclosing(
                Coordinate(longitude=minx, latitude=miny),
                Coordinate(longitude=maxx, latitude=maxy),
            )
        except CoordinateOutOfRangeError as ex:
            raise typer.BadParameter(str(ex)) from None
        except ValueError:  # ValueError raised when passing non-numbers or wrong count
            raise typer.BadParameter(
                "Cannot parse provided bounding box."
                " Valid value must contain 4 floating point numbers"
                " separated by commas."
            ) from None


class GeohashParser(click.ParamType):  # type: ignore
    """Parser for geohash in base32 form."""

    name = "TEXT (Geohash)"

    def convert(self, value, param=None, ctx=None):  # type: ignore
        """Convert parameter value."""
        if isinstance(value, GeohashCell):
            return value
        try:
            return GeohashCell.from_string(value.strip())
        except InvalidGeohashError as ex:
            raise typer.BadParameter(str(ex)) from None


@app.callback()  # type: ignore
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose/",
            help="Whether to show debug logs.",
            show_default=False,
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show the application's version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    GeohashGrid CLI.

    Encodes coordinates into geohashes, decodes them back and lists geohashes covering
    a bounding box.
    """
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.disable(logging.NOTSET)
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
            force=True,
        )
    else:
        logging.disable(logging.CRITICAL)


@app.command()  # type: ignore
def encode(
    longitude: Annotated[
        float,
        typer.Argument(help="Longitude in degrees.", show_default=False),
    ],
    latitude: Annotated[
        float,
        typer.Argument(help="Latitude in degrees.", show_default=False),
    ],
    precision: Annotated[
        Optional[int],
        typer.Option(
            "--precision",
            "-p",
            help=(
                "Number of geohash [bold dark_orange]characters[/bold dark_orange]."
                " Defaults to 12. Cannot be used together with"
                " [bold bright_cyan]bits[/bold bright_cyan]."
            ),
            min=1,
            max=MAX_CHARACTER_PRECISION,
            show_default=False,
        ),
    ] = None,
    bits: Annotated[
        Optional[int],
        typer.Option(
            "--bits",
            "-b",
            help=(
                "Number of [bold dark_orange]bits per axis[/bold dark_orange]."
                " Cannot be used together with [bold bright_cyan]precision[/bold bright_cyan]."
            ),
            min=1,
            max=MAX_BINARY_PRECISION,
            show_default=False,
        ),
    ] = None,
    raw_bits: Annotated[
        bool,
        typer.Option(
            "--raw/",
            help="Whether to print the interleaved integer in hex form instead of the geohash.",
            show_default=False,
        ),
    ] = False,
) -> None:
    """Encode a coordinate into a geohash."""
    if precision is not None and bits is not None:
        raise typer.BadParameter("Provided both precision and bits")

    cell_precision = (
        Precision.bits(bits) if bits is not None else Precision.characters(precision or 12)
    )

    try:
        cell = GeohashCell.from_coordinate(
            Coordinate(longitude=longitude, latitude=latitude), cell_precision
        )
    except (CoordinateOutOfRangeError, PrecisionOutOfRangeError) as ex:
        _print_error_and_exit(ex)

    typer.echo(_cell_label(cell, raw_bits))


@app.command()  # type: ignore
def decode(
    geohash: Annotated[
        GeohashCell,
        typer.Argument(
            help="Geohash to decode.",
            click_type=GeohashParser(),
            show_default=False,
        ),
    ],
) -> None:
    """Decode a geohash into the cell center and bounds."""
    bounding_box = geohash.bounding_box()
    center = bounding_box.center()
    typer.echo(f"{center.longitude} {center.latitude}")
    typer.echo(" ".join(str(value) for value in bounding_box.bounds))


@app.command()  # type: ignore
def neighbors(
    geohash: Annotated[
        GeohashCell,
        typer.Argument(
            help="Geohash to find neighbours of.",
            click_type=GeohashParser(),
            show_default=False,
        ),
    ],
) -> None:
    """Show eight neighbours of a geohash."""
    from rich import print as rprint
    from rich.table import Table

    table = Table("Direction", "Geohash")
    for direction, cell in geohash.neighbors().items():
        table.add_row(direction, cell.to_string())
    rprint(table)


@app.command()  # type: ignore
def cover(
    bbox: Annotated[
        BoundingBox,
        typer.Option(
            "--bbox",
            help=(
                "Area to cover in the [bold dark_orange]bounding box[/bold dark_orange] format"
                " - 4 floating point numbers separated by commas (minx,miny,maxx,maxy)."
            ),
            click_type=BboxParser(),
            show_default=False,
        ),
    ],
    bits: Annotated[
        int,
        typer.Option(
            "--bits",
            "-b",
            help="Number of [bold dark_orange]bits per axis[/bold dark_orange] of the cells.",
            min=1,
            max=MAX_BINARY_PRECISION,
        ),
    ] = 20,
    geojson: Annotated[
        bool,
        typer.Option(
            "--geojson/",
            help="Whether to print cells as a GeoJSON FeatureCollection.",
            show_default=False,
        ),
    ] = False,
) -> None:
    """
    List geohashes covering a bounding box.

    Cells are printed row by row, from south-west to north-east.
    """
    from geohashgrid.cell_iterator import CellIterator

    try:
        iterator = CellIterator(bbox, bit_precision=bits)
    except PrecisionOutOfRangeError as ex:
        _print_error_and_exit(ex)

    if geojson:
        from geohashgrid.functions import cells_to_geodataframe

        typer.echo(cells_to_geodataframe(iterator).to_json())
        return

    for cell in iterator:
        typer.echo(_cell_label(cell))

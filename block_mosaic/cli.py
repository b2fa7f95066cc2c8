"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from block_mosaic.composer import MosaicResult, make_mosaic
from block_mosaic.config import MosaicConfig
from block_mosaic.errors import MosaicError
from block_mosaic.image_io import load_image, save_image
from block_mosaic.materials import format_stacks, materials_report, write_materials
from block_mosaic.matcher import require_tiles
from block_mosaic.palette import Palette, load_palette
from block_mosaic.patterns import NameFilter, read_pattern_file

app = typer.Typer(
    name="block-mosaic",
    help="Rebuild images out of texture blocks and list the materials needed.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _optional_path(value: str) -> Path | None:
    return None if value == "-" else Path(value)


def _load_palette(cfg: MosaicConfig) -> Palette:
    name_filter = NameFilter.from_strings(
        exclude=read_pattern_file(cfg.blacklist),
        require=read_pattern_file(cfg.whitelist),
    )
    return load_palette(
        cfg.textures_dir,
        resolution=cfg.tile_resolution,
        name_filter=name_filter,
        extensions=cfg.TILE_EXTENSIONS,
    )


def _materials_table(result: MosaicResult, limit: int) -> Table:
    report = materials_report(result.tally)
    table = Table(title=f"Materials ({len(report)} kinds, {result.total_blocks:,} blocks)")
    table.add_column("Block", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Stacks", justify="right", style="dim")
    for name, count in report[:limit]:
        table.add_row(name, f"{count:,}", format_stacks(count))
    if len(report) > limit:
        table.add_row("...", f"{len(report) - limit} more", "")
    return table


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    return typer.Exit(1)


# Defaults come from MosaicConfig - single source of truth
_DEFAULTS = MosaicConfig()


# -- convert command ---------------------------------------------------

@app.command()
def convert(
    source: Path = typer.Argument(..., help="Path of the image to convert"),
    output: Path = typer.Option(
        _DEFAULTS.output_path, "--output", "-o", help="Path of the mosaic image",
    ),
    width: int = typer.Option(
        _DEFAULTS.block_width, "--width", "-w",
        help="Width of the mosaic in blocks (height keeps aspect ratio)",
    ),
    textures: Path = typer.Option(
        _DEFAULTS.textures_dir, "--textures", "-t", help="Folder of texture tiles",
    ),
    blacklist: str = typer.Option(
        "-", "--blacklist", "-b", help="File of tile patterns to exclude ('-' = none)",
    ),
    whitelist: str = typer.Option(
        "-", "--whitelist", help="File of tile patterns to allow ('-' = all)",
    ),
    materials: str = typer.Option(
        "-", "--materials", "-m", help="Write the materials list here ('-' = skip)",
    ),
    resample_filter: str = typer.Option(
        _DEFAULTS.resample_filter, "--filter", "-f",
        help="nearest, linear, cubic, lanczos, box or hamming",
    ),
    resolution: int = typer.Option(
        _DEFAULTS.tile_resolution, "--resolution", help="Texture side length in pixels",
    ),
    method: str = typer.Option(
        _DEFAULTS.match_method, "--method", help="'linear' or 'kdtree'",
    ),
    top: int = typer.Option(15, "--top", help="Materials shown in the summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Convert a single image into a block mosaic."""
    _setup_logging(verbose)

    try:
        cfg = MosaicConfig(
            block_width=width,
            resample_filter=resample_filter,
            tile_resolution=resolution,
            match_method=method,
            textures_dir=textures,
            blacklist=_optional_path(blacklist),
            whitelist=_optional_path(whitelist),
            materials_path=_optional_path(materials),
            output_path=output,
        )
    except ValueError as exc:
        raise _fail(exc) from exc

    console.print(Panel.fit(
        f"[bold]BLOCK MOSAIC[/bold]\n"
        f"Width: {cfg.block_width} blocks  |  Filter: {cfg.resample_filter}\n"
        f"Textures: {cfg.textures_dir}  |  Tile: {cfg.tile_resolution}px",
        border_style="cyan",
    ))

    t0 = time.perf_counter()
    try:
        palette = _load_palette(cfg)
        result = make_mosaic(load_image(source), palette, cfg)
        save_image(result.canvas, cfg.output_path)
        if cfg.materials_path is not None:
            write_materials(result.tally, cfg.materials_path)
    except (MosaicError, OSError) as exc:
        raise _fail(exc) from exc

    console.print(_materials_table(result, top))
    h, w = result.canvas.shape[:2]
    console.print(
        f"[green]✓[/green] Saved to {cfg.output_path}  "
        f"[dim]{result.width_blocks}x{result.height_blocks} blocks = {w}x{h} px"
        f"  time={time.perf_counter() - t0:.1f}s[/dim]"
    )


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    width: int = typer.Option(_DEFAULTS.block_width, "--width", "-w"),
    textures: Path = typer.Option(_DEFAULTS.textures_dir, "--textures", "-t"),
    blacklist: str = typer.Option("-", "--blacklist", "-b"),
    whitelist: str = typer.Option("-", "--whitelist"),
    resample_filter: str = typer.Option(_DEFAULTS.resample_filter, "--filter", "-f"),
    resolution: int = typer.Option(_DEFAULTS.tile_resolution, "--resolution"),
    method: str = typer.Option(_DEFAULTS.match_method, "--method"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Convert every image in INPUT_DIR, sharing one palette."""
    _setup_logging(verbose)
    logger = logging.getLogger("block_mosaic")

    try:
        cfg = MosaicConfig(
            block_width=width,
            resample_filter=resample_filter,
            tile_resolution=resolution,
            match_method=method,
            textures_dir=textures,
            blacklist=_optional_path(blacklist),
            whitelist=_optional_path(whitelist),
            input_dir=input_dir,
            output_dir=output_dir,
        )
    except ValueError as exc:
        raise _fail(exc) from exc

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    try:
        palette = _load_palette(cfg)
        require_tiles(palette)
    except (MosaicError, OSError) as exc:
        raise _fail(exc) from exc

    output_dir.mkdir(parents=True, exist_ok=True)
    console.print(Panel.fit(
        f"[bold]BLOCK MOSAIC[/bold]\n"
        f"Width: {cfg.block_width} blocks  |  Filter: {cfg.resample_filter}\n"
        f"Tiles: {len(palette)}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    failed = 0
    for idx, img_path in enumerate(images, 1):
        stem = img_path.stem
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t0 = time.perf_counter()

        try:
            result = make_mosaic(load_image(img_path), palette, cfg)
        except (MosaicError, OSError) as exc:
            logger.error("Skipping %s: %s", img_path.name, exc)
            failed += 1
            continue

        mosaic_path = output_dir / f"{stem}_mosaic.png"
        save_image(result.canvas, mosaic_path)
        write_materials(result.tally, output_dir / f"{stem}_materials.txt")

        console.print(
            f"  [green]✓[/green] {mosaic_path.name}  "
            f"[dim]{result.width_blocks}x{result.height_blocks} blocks  "
            f"{len(result.tally)} kinds  time={time.perf_counter() - t0:.1f}s[/dim]"
        )

    if failed:
        console.print(f"[yellow]{failed} image(s) failed[/yellow]")
        raise typer.Exit(1)
    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))


# -- palette command ---------------------------------------------------

@app.command()
def palette(
    textures: Path = typer.Option(_DEFAULTS.textures_dir, "--textures", "-t"),
    blacklist: str = typer.Option("-", "--blacklist", "-b"),
    whitelist: str = typer.Option("-", "--whitelist"),
    resolution: int = typer.Option(_DEFAULTS.tile_resolution, "--resolution"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """List the usable tiles and their average colours."""
    _setup_logging(verbose)

    try:
        cfg = MosaicConfig(
            tile_resolution=resolution,
            textures_dir=textures,
            blacklist=_optional_path(blacklist),
            whitelist=_optional_path(whitelist),
        )
        tiles = _load_palette(cfg)
    except (MosaicError, ValueError, OSError) as exc:
        raise _fail(exc) from exc

    table = Table(title=f"{len(tiles)} usable tiles in {textures}")
    table.add_column("Block", style="cyan")
    table.add_column("Average colour")
    table.add_column("", width=4)
    for name, tile in tiles.items():
        r, g, b = tile.color
        hex_color = f"#{r:02X}{g:02X}{b:02X}"
        table.add_row(name, f"{hex_color}  ({r}, {g}, {b})", f"[on {hex_color}]    [/]")
    console.print(table)


if __name__ == "__main__":
    app()

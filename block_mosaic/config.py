"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from block_mosaic.image_io import RESAMPLE_FILTERS
from block_mosaic.matcher import MATCH_METHODS


@dataclass(frozen=True)
class MosaicConfig:
    """All tuneable parameters for a mosaic run.

    Attributes:
        block_width:     Width of the mosaic in blocks (height keeps aspect ratio).
        resample_filter: Filter used to shrink the source to the block grid.
        tile_resolution: Side length of every texture, in pixels.
        match_method:    "linear" (full scan) or "kdtree" (spatial index).
        textures_dir:    Folder of candidate texture images.
        blacklist:       File of tile name patterns to exclude ("-" = none).
        whitelist:       File of tile name patterns to require ("-" = none).
        materials_path:  Where to write the materials list (None = skip).
        output_path:     Output image for single conversions.
        input_dir:       Folder to scan for source images (batch mode).
        output_dir:      Folder for results (batch mode).
    """

    # Grid
    block_width: int = 100
    resample_filter: str = "nearest"

    # Tiles
    tile_resolution: int = 16
    match_method: str = "linear"
    textures_dir: Path = field(default_factory=lambda: Path("textures"))
    blacklist: Path | None = None
    whitelist: Path | None = None

    # Output
    materials_path: Path | None = None
    output_path: Path = field(default_factory=lambda: Path("mosaic.png"))

    # Batch paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    TILE_EXTENSIONS: frozenset[str] = frozenset({".png"})
    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif"}
    )

    def __post_init__(self) -> None:
        if self.block_width < 1:
            msg = f"block_width must be positive, got {self.block_width}"
            raise ValueError(msg)
        if self.tile_resolution < 1:
            msg = f"tile_resolution must be positive, got {self.tile_resolution}"
            raise ValueError(msg)
        if self.resample_filter.lower() not in RESAMPLE_FILTERS:
            available = ", ".join(RESAMPLE_FILTERS)
            msg = f"Unknown resample filter '{self.resample_filter}'. Available: {available}"
            raise ValueError(msg)
        if self.match_method not in MATCH_METHODS:
            available = ", ".join(MATCH_METHODS)
            msg = f"Unknown match method '{self.match_method}'. Available: {available}"
            raise ValueError(msg)

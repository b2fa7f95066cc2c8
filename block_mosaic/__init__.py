"""
Block Mosaic Generator
======================

Rebuild any image out of square texture tiles (e.g. 16x16 game block
textures). The image is shrunk to a grid of blocks, each block is
replaced by the texture whose average colour is closest, and a list of
the required materials is produced.
"""

__version__ = "1.0.0"

from block_mosaic.color_utils import average_color, color_distance
from block_mosaic.composer import MosaicResult, compose, make_mosaic
from block_mosaic.config import MosaicConfig
from block_mosaic.errors import (
    EmptyPalette,
    InvalidResampleTarget,
    InvalidTileCandidate,
    MosaicError,
    UnknownTileReference,
)
from block_mosaic.image_io import compute_proxy_size, resample
from block_mosaic.materials import materials_report, write_materials
from block_mosaic.matcher import best_match, match_pixels
from block_mosaic.palette import (
    Palette,
    Tile,
    TileCandidate,
    build_palette,
    load_palette,
)
from block_mosaic.patterns import NameFilter, Pattern

__all__ = [
    "EmptyPalette",
    "InvalidResampleTarget",
    "InvalidTileCandidate",
    "MosaicConfig",
    "MosaicError",
    "MosaicResult",
    "NameFilter",
    "Palette",
    "Pattern",
    "Tile",
    "TileCandidate",
    "UnknownTileReference",
    "average_color",
    "best_match",
    "build_palette",
    "color_distance",
    "compose",
    "compute_proxy_size",
    "load_palette",
    "make_mosaic",
    "match_pixels",
    "materials_report",
    "resample",
    "write_materials",
]

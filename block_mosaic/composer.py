"""Mosaic composition: match block-grid pixels and paste tiles."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from block_mosaic.config import MosaicConfig
from block_mosaic.errors import UnknownTileReference
from block_mosaic.image_io import resample
from block_mosaic.matcher import match_pixels, require_tiles
from block_mosaic.palette import Palette

logger = logging.getLogger(__name__)


@dataclass
class MosaicResult:
    """Output of one conversion run.

    Attributes:
        canvas: (H * R, W * R, 3) uint8 composited tiles.
        tally:  Tile name -> number of blocks using it.
        proxy:  (H, W, 3) uint8 block-grid image the tiles were matched to.
    """

    canvas: np.ndarray
    proxy: np.ndarray
    tally: dict[str, int] = field(default_factory=dict)

    @property
    def width_blocks(self) -> int:
        return int(self.proxy.shape[1])

    @property
    def height_blocks(self) -> int:
        return int(self.proxy.shape[0])

    @property
    def total_blocks(self) -> int:
        return sum(self.tally.values())


def compose(
    proxy: np.ndarray,
    palette: Palette,
    method: str = "linear",
) -> MosaicResult:
    """Replace every proxy pixel with its closest tile.

    Pixels are visited in row-major order; each tile is written to
    ``(row * R, col * R)`` and overwrites whatever was there.
    """
    require_tiles(palette)

    indices = match_pixels(proxy, palette, method=method)
    names = palette.names
    res = palette.resolution
    h, w = indices.shape

    canvas = np.zeros((h * res, w * res, 3), dtype=np.uint8)
    tally: dict[str, int] = {}

    for row in range(h):
        y = row * res
        for col in range(w):
            name = names[indices[row, col]]
            try:
                tile = palette[name]
            except KeyError:
                msg = f"Matched tile '{name}' is not in the palette"
                raise UnknownTileReference(msg) from None
            tally[name] = tally.get(name, 0) + 1
            x = col * res
            canvas[y:y + res, x:x + res] = tile.pixels

    return MosaicResult(canvas=canvas, proxy=proxy, tally=tally)


def make_mosaic(
    source: Image.Image | np.ndarray,
    palette: Palette,
    config: MosaicConfig | None = None,
) -> MosaicResult:
    """Full pipeline: resample *source* to the block grid and compose it."""
    cfg = config or MosaicConfig(tile_resolution=palette.resolution)
    if cfg.tile_resolution != palette.resolution:
        msg = (
            f"Palette resolution {palette.resolution} does not match "
            f"configured tile resolution {cfg.tile_resolution}"
        )
        raise ValueError(msg)
    require_tiles(palette)

    t0 = time.perf_counter()
    proxy = resample(source, cfg.block_width, cfg.resample_filter)
    h, w = proxy.shape[:2]
    logger.info(
        "Block grid: %dx%d = %d blocks (%s filter)",
        w, h, w * h, cfg.resample_filter,
    )

    result = compose(proxy, palette, method=cfg.match_method)
    logger.info(
        "Mosaic %dx%d px from %d distinct tiles  (%.2f s)",
        result.canvas.shape[1], result.canvas.shape[0],
        len(result.tally), time.perf_counter() - t0,
    )
    return result

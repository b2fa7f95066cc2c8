"""Nearest-colour matching of block-grid pixels to palette tiles."""

from __future__ import annotations

import logging
import time

import numpy as np
from scipy.spatial import cKDTree

from block_mosaic.color_utils import Color, color_distance, distance_matrix
from block_mosaic.errors import EmptyPalette
from block_mosaic.palette import Palette

logger = logging.getLogger(__name__)

MATCH_METHODS = ("linear", "kdtree")


def require_tiles(palette: Palette) -> None:
    if len(palette) == 0:
        msg = "No candidate tiles: the palette is empty"
        raise EmptyPalette(msg)


def best_match(color: Color, palette: Palette) -> str:
    """Name of the tile whose colour is closest to *color*.

    Ties go to the first tile in palette order.
    """
    require_tiles(palette)
    best: tuple[int, str] | None = None
    for name, tile in palette.items():
        diff = color_distance(color, tile.color)
        if best is None or diff < best[0]:
            best = (diff, name)
    return best[1]


def _match_linear(colors: np.ndarray, palette_colors: np.ndarray) -> np.ndarray:
    # argmin returns the first minimum, i.e. the linear-scan tie-break
    return distance_matrix(colors, palette_colors).argmin(axis=1)


def _match_kdtree(colors: np.ndarray, palette_colors: np.ndarray) -> np.ndarray:
    tree = cKDTree(palette_colors.astype(np.float64))
    queries = colors.astype(np.float64)
    dist, _ = tree.query(queries, k=1, p=1)

    # Distances are integers; collect every entry at the minimum and keep
    # the lowest palette index.
    result = np.empty(len(queries), dtype=np.intp)
    for i, (query, d) in enumerate(zip(queries, dist, strict=True)):
        ties = tree.query_ball_point(query, r=d + 0.5, p=1)
        result[i] = min(ties)
    return result


def match_pixels(
    proxy: np.ndarray,
    palette: Palette,
    method: str = "linear",
) -> np.ndarray:
    """Find the closest palette entry for every pixel of *proxy*.

    Args:
        proxy:   (H, W, 3) uint8 block-grid image.
        palette: Tiles to choose from.
        method:  ``"linear"`` (full scan) or ``"kdtree"`` (spatial index).

    Returns:
        (H, W) array of indices into ``palette.names``.
    """
    if method not in MATCH_METHODS:
        available = ", ".join(MATCH_METHODS)
        msg = f"Unknown match method '{method}'. Available: {available}"
        raise ValueError(msg)
    require_tiles(palette)

    h, w = proxy.shape[:2]
    flat = proxy.reshape(-1, 3)
    unique, inverse = np.unique(flat, axis=0, return_inverse=True)

    logger.info(
        "Matching %d unique colours against %d tiles (%s) ...",
        len(unique), len(palette), method,
    )
    t0 = time.perf_counter()
    if method == "kdtree":
        indices = _match_kdtree(unique, palette.colors)
    else:
        indices = _match_linear(unique, palette.colors)
    logger.info("Matching done  (%.2f s)", time.perf_counter() - t0)

    return indices[inverse.reshape(-1)].reshape(h, w)

"""Colour distance and average-colour helpers."""

from __future__ import annotations

import numpy as np

Color = tuple[int, int, int]


def color_distance(a: Color, b: Color) -> int:
    """Sum of absolute per-channel differences between two RGB colours."""
    return (
        abs(int(a[0]) - int(b[0]))
        + abs(int(a[1]) - int(b[1]))
        + abs(int(a[2]) - int(b[2]))
    )


def average_color(pixels: np.ndarray) -> Color:
    """Unweighted per-channel mean of an ``(..., 3)`` buffer, floored."""
    flat = np.asarray(pixels).reshape(-1, 3)
    count = len(flat)
    if count == 0:
        msg = "Cannot average an empty pixel buffer"
        raise ValueError(msg)
    total = flat.sum(axis=0, dtype=np.uint64)
    r, g, b = (int(c) // count for c in total)
    return (r, g, b)


def distance_matrix(
    colors: np.ndarray,
    palette_colors: np.ndarray,
    chunk_size: int = 4096,
) -> np.ndarray:
    """Pairwise channel-difference distance between colours and a palette.

    Args:
        colors:         (M, 3) uint8 RGB.
        palette_colors: (N, 3) uint8 RGB.
        chunk_size:     Rows computed per batch (controls peak RAM).

    Returns:
        (M, N) int32 distance matrix.
    """
    c = np.asarray(colors).reshape(-1, 3).astype(np.int32)
    p = np.asarray(palette_colors).reshape(-1, 3).astype(np.int32)

    m = len(c)
    dist = np.empty((m, len(p)), dtype=np.int32)
    for i in range(0, m, chunk_size):
        j = min(i + chunk_size, m)
        diff = c[i:j, np.newaxis, :] - p[np.newaxis, :, :]
        dist[i:j] = np.abs(diff).sum(axis=2)
    return dist

"""Image loading, saving, and block-grid resampling."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image

from block_mosaic.errors import InvalidResampleTarget, UnknownResampleFilter

RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "linear": Image.Resampling.BILINEAR,
    "cubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
    "box": Image.Resampling.BOX,
    "hamming": Image.Resampling.HAMMING,
}


def get_resample_filter(name: str) -> Image.Resampling:
    """Look up a Pillow resampling filter by its short name."""
    try:
        return RESAMPLE_FILTERS[name.lower()]
    except KeyError:
        available = ", ".join(RESAMPLE_FILTERS)
        msg = f"Unknown resample filter '{name}'. Available: {available}"
        raise UnknownResampleFilter(msg) from None


def compute_proxy_size(
    original_width: int,
    original_height: int,
    block_width: int,
) -> tuple[int, int]:
    """Compute the (w, h) of the block grid for a source image.

    The width is exactly *block_width*; the height keeps the aspect ratio
    and is rounded down. A zero height is rejected.
    """
    if original_width < 1 or original_height < 1:
        msg = f"Source image must be at least 1x1, got {original_width}x{original_height}"
        raise InvalidResampleTarget(msg)
    if block_width < 1:
        msg = f"Block width must be positive, got {block_width}"
        raise InvalidResampleTarget(msg)

    h = block_width * original_height // original_width
    if h == 0:
        msg = (
            f"Block width {block_width} is too small for a "
            f"{original_width}x{original_height} image (zero rows)"
        )
        raise InvalidResampleTarget(msg)
    return block_width, h


def resample(
    image: Image.Image | np.ndarray,
    block_width: int,
    resample_filter: str = "nearest",
) -> np.ndarray:
    """Downscale *image* to the block grid.

    Returns:
        (H, W, 3) uint8 array, one pixel per block.
    """
    if isinstance(image, np.ndarray):
        image = Image.fromarray(image.astype(np.uint8))
    image = image.convert("RGB")

    resampling = get_resample_filter(resample_filter)
    w, h = compute_proxy_size(image.width, image.height, block_width)
    proxy = image.resize((w, h), resampling)
    return np.array(proxy, dtype=np.uint8)


def load_image(path: str | Path | BinaryIO) -> Image.Image:
    """Open an image (path or binary file object) and convert it to opaque RGB."""
    with Image.open(path) as img:
        return img.convert("RGB")


def load_rgba(path: str | Path) -> np.ndarray:
    """Open an image as an (H, W, 4) uint8 RGBA array."""
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def save_image(array: np.ndarray, path: str | Path) -> None:
    """Save an (H, W, 3) uint8 canvas, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(array.astype(np.uint8)).save(path)

"""Tile palette: texture images keyed by name with their average colour."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from block_mosaic.color_utils import Color, average_color
from block_mosaic.errors import InvalidTileCandidate, TextureDirectoryError

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 16
OPAQUE = 255


class TileCandidate(NamedTuple):
    """An undecided texture: a name hint and its (H, W, 4) uint8 RGBA pixels."""

    name_hint: str
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True, eq=False)
class Tile:
    """A validated square texture and its representative colour."""

    name: str
    pixels: np.ndarray  # (R, R, 3) uint8
    color: Color

    @property
    def resolution(self) -> int:
        return int(self.pixels.shape[0])

    @classmethod
    def from_rgba(
        cls,
        name: str,
        rgba: np.ndarray,
        resolution: int = DEFAULT_RESOLUTION,
    ) -> Tile:
        """Validate an RGBA buffer and build a tile from it.

        Raises:
            InvalidTileCandidate: wrong dimensions or any non-opaque pixel.
        """
        rgba = np.asarray(rgba, dtype=np.uint8)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            msg = f"Tile '{name}' is not an RGBA buffer (shape {rgba.shape})"
            raise InvalidTileCandidate(msg)

        h, w = rgba.shape[:2]
        if (w, h) != (resolution, resolution):
            msg = f"Tile '{name}' is {w}x{h}, expected {resolution}x{resolution}"
            raise InvalidTileCandidate(msg)

        if np.any(rgba[:, :, 3] < OPAQUE):
            msg = f"Tile '{name}' is not fully opaque"
            raise InvalidTileCandidate(msg)

        rgb = np.ascontiguousarray(rgba[:, :, :3])
        rgb.setflags(write=False)
        return cls(name=name, pixels=rgb, color=average_color(rgb))


class Palette(Mapping[str, Tile]):
    """Immutable name -> tile mapping iterated in sorted name order."""

    def __init__(
        self,
        tiles: Iterable[Tile] = (),
        resolution: int = DEFAULT_RESOLUTION,
    ) -> None:
        by_name: dict[str, Tile] = {}
        for tile in tiles:
            if tile.resolution != resolution:
                msg = (
                    f"Tile '{tile.name}' has resolution {tile.resolution}, "
                    f"palette expects {resolution}"
                )
                raise ValueError(msg)
            by_name[tile.name] = tile  # last one wins
        self._tiles = {name: by_name[name] for name in sorted(by_name)}
        self._resolution = resolution

        colors = np.array(
            [t.color for t in self._tiles.values()], dtype=np.uint8,
        ).reshape(-1, 3)
        colors.setflags(write=False)
        self._colors = colors

    def __getitem__(self, name: str) -> Tile:
        return self._tiles[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __repr__(self) -> str:
        return f"Palette({len(self)} tiles, resolution={self._resolution})"

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def names(self) -> list[str]:
        return list(self._tiles)

    @property
    def colors(self) -> np.ndarray:
        """(N, 3) uint8 representative colours in iteration order."""
        return self._colors


def tile_name_from_filename(filename: str) -> str | None:
    """Strip everything from the first ``.`` of a base filename.

    ``"oak_log.top.png"`` -> ``"oak_log"``. Returns ``None`` when nothing
    usable is left (e.g. ``".hidden"``).
    """
    base = Path(filename).name
    name = base.split(".", 1)[0]
    return name or None


def build_palette(
    candidates: Iterable[TileCandidate],
    resolution: int = DEFAULT_RESOLUTION,
    name_filter: Callable[[str], bool] | None = None,
) -> Palette:
    """Validate candidates and collect the usable ones into a palette.

    Candidates with an unusable name, rejected by *name_filter*, of the
    wrong size, or with transparent pixels are skipped. Duplicate names
    keep the last candidate seen.
    """
    tiles: list[Tile] = []
    skipped = 0
    for candidate in candidates:
        name = tile_name_from_filename(candidate.name_hint)
        if name is None:
            skipped += 1
            continue
        if name_filter is not None and not name_filter(name):
            logger.debug("Filtered out %s", name)
            skipped += 1
            continue
        try:
            tiles.append(Tile.from_rgba(name, candidate.pixels, resolution))
        except InvalidTileCandidate as exc:
            logger.debug("Skipping %s", exc)
            skipped += 1

    palette = Palette(tiles, resolution=resolution)
    logger.debug("Palette built: %d tiles kept, %d skipped", len(palette), skipped)
    return palette


def scan_tile_directory(
    directory: str | Path,
    extensions: Iterable[str] = (".png",),
) -> Iterator[TileCandidate]:
    """Yield an RGBA candidate for every texture file in *directory*.

    Files are visited in sorted order. Files Pillow cannot decode are
    skipped with a warning.
    """
    folder = Path(directory)
    if not folder.is_dir():
        msg = f"Texture directory not found: {folder}"
        raise TextureDirectoryError(msg)

    wanted = {e.lower() for e in extensions}
    for path in sorted(folder.iterdir()):
        if not path.is_file() or path.suffix.lower() not in wanted:
            continue
        try:
            with Image.open(path) as img:
                rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Could not read texture %s: %s", path.name, exc)
            continue
        yield TileCandidate(path.name, rgba)


def load_palette(
    directory: str | Path,
    resolution: int = DEFAULT_RESOLUTION,
    name_filter: Callable[[str], bool] | None = None,
    extensions: Iterable[str] = (".png",),
) -> Palette:
    """Scan a texture directory and build the palette from it."""
    palette = build_palette(
        scan_tile_directory(directory, extensions),
        resolution=resolution,
        name_filter=name_filter,
    )
    logger.info("Loaded %d usable tiles from %s", len(palette), directory)
    return palette

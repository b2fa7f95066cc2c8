"""Exception hierarchy for the mosaic pipeline."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for every error raised by :mod:`block_mosaic`."""


class InvalidTileCandidate(MosaicError):
    """A candidate texture has the wrong size or is not fully opaque.

    Palette construction catches this and skips the candidate.
    """


class EmptyPalette(MosaicError):
    """No usable tiles are left after filtering and validation."""


class InvalidResampleTarget(MosaicError, ValueError):
    """The requested block width gives a degenerate (zero-sized) proxy image."""


class UnknownResampleFilter(MosaicError, ValueError):
    """The resample filter name is not one of ``RESAMPLE_FILTERS``."""


class UnknownTileReference(MosaicError, LookupError):
    """A matched tile name is missing from the palette (internal fault)."""


class TextureDirectoryError(MosaicError, FileNotFoundError):
    """The texture directory does not exist or is not a directory."""

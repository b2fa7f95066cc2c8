#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

Put 16x16 textures into ``textures/`` and run:

    python main.py convert my_photo.jpg -o mosaic.png -m materials.txt

Or drop images into ``images/`` and convert them all:

    python main.py batch

    python -m block_mosaic.cli --help
"""

from block_mosaic.cli import app

if __name__ == "__main__":
    app()

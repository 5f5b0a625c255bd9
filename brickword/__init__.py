"""Brick word puzzle engine.

This package exposes the public API surface via:

- ``brickword.engine.generator.PuzzleGenerator``: orchestrates layout,
  partitioning and packing.
- ``brickword.engine.partitioner.BrickPartitioner``: splits cells into bricks.
- ``brickword.engine.packer.BrickPacker``: packs bricks around the origin.
"""

from .engine.generator import GeneratorConfig, PuzzleGenerator, PuzzleResult
from .engine.packer import BrickPacker, PackerConfig
from .engine.partitioner import BrickPartitioner, PartitionConfig

__all__ = [
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleResult",
    "BrickPacker",
    "PackerConfig",
    "BrickPartitioner",
    "PartitionConfig",
]

__version__ = "0.1.0"

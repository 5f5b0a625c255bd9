"""Main puzzle generator orchestration.

Pipeline:
  1. Layout: ask the layout collaborator for word placements, assemble them
     into cells and regenerate until the cells form one connected region.
  2. Partition: split the cells into connected bricks.
  3. Pack: move the bricks into a separated spiral around the origin.
  4. Hint: attach the caller's hint or one produced by the hint providers.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import (
    GROWTH_PROBABILITIES,
    LAYOUT_RETRY_LIMIT,
    PARTITION_RETRY_LIMIT,
    PLACEMENT_ATTEMPT_LIMIT,
    SeedOrder,
)
from ..core.exceptions import LayoutDisconnected, ValidationError
from ..core.models import Cell, PuzzleState, WordPlacement
from ..io.hints import HintProvider, TemplateHintProvider, resolve_hint
from ..utils.logger import get_logger
from .assembler import assemble_cells
from .connectivity import connected_components, is_connected
from .layout import IntersectionLayoutGenerator, LayoutGenerator
from .packer import BrickPacker, PackerConfig
from .partitioner import BrickPartitioner, PartitionConfig
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    seed: Optional[int] = None
    layout_retry_limit: int = LAYOUT_RETRY_LIMIT
    partition_retry_limit: int = PARTITION_RETRY_LIMIT
    placement_attempt_limit: int = PLACEMENT_ATTEMPT_LIMIT
    shuffle_words_on_retry: bool = True
    seed_order: SeedOrder = SeedOrder.SHUFFLE
    growth_probabilities: Tuple[float, ...] = GROWTH_PROBABILITIES
    strict_placement: bool = False
    language: str = "English"

    def to_partition_config(self, seed_override: Optional[int] = None) -> PartitionConfig:
        return PartitionConfig(
            retry_limit=self.partition_retry_limit,
            growth_probabilities=tuple(self.growth_probabilities),
            seed_order=SeedOrder(self.seed_order),
            rng_seed=seed_override if seed_override is not None else self.seed,
        )

    def to_packer_config(self, seed_override: Optional[int] = None) -> PackerConfig:
        return PackerConfig(
            attempt_limit=self.placement_attempt_limit,
            strict=self.strict_placement,
            rng_seed=seed_override if seed_override is not None else self.seed,
        )


@dataclass
class PuzzleResult:
    state: PuzzleState
    cells: List[Cell]
    placements: List[WordPlacement]
    fallbacks: List[int] = field(default_factory=list)
    fallback_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None
    layout_attempts: int = 0
    partition_attempts: int = 0


class PuzzleGenerator:
    """High-level orchestrator: connected layout, partition, packing, hint."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        layout_generator: Optional[LayoutGenerator] = None,
        hint_provider: Optional[HintProvider] = None,
        hint_fallback_providers: Optional[Sequence[HintProvider]] = None,
        validator: Optional[PuzzleValidator] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.layout_generator = layout_generator or IntersectionLayoutGenerator(
            seed=self.rng.randint(0, 1_000_000)
        )
        self.hint_provider = hint_provider
        if hint_fallback_providers is None:
            self.hint_fallback_providers: List[HintProvider] = [TemplateHintProvider()]
        else:
            self.hint_fallback_providers = list(hint_fallback_providers)
        self.validator = validator or PuzzleValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[str], hint: Optional[str] = None) -> PuzzleResult:
        words = [word.strip() for word in words if word and word.strip()]
        if not words:
            raise ValueError("At least one word is required")

        placements, cells, layout_attempts = self._connected_layout(words)

        partitioner = BrickPartitioner(
            self.config.to_partition_config(seed_override=self.rng.randint(0, 1_000_000))
        )
        bricks = partitioner.partition(cells)
        validation = self.validator.validate_partition(cells, bricks)
        if not validation.ok:
            raise ValidationError(f"Partition validation failed: {validation.messages}")

        packer = BrickPacker(
            self.config.to_packer_config(seed_override=self.rng.randint(0, 1_000_000))
        )
        packing = packer.pack(bricks)
        validation = self.validator.validate_layout(bricks, packing.bricks, packing.fallbacks)
        if not validation.ok:
            raise ValidationError(f"Layout validation failed: {validation.messages}")

        if hint is None:
            hint = resolve_hint(
                self.hint_provider, self.hint_fallback_providers, words, self.config.language
            )

        messages = [
            f"Brick {index} kept at its source position" for index in packing.fallbacks
        ]
        LOGGER.info(
            "Puzzle generated: %d cells in %d bricks (%d layout / %d partition attempts)",
            len(cells), len(packing.bricks), layout_attempts, partitioner.attempts,
        )
        return PuzzleResult(
            state=PuzzleState(bricks=packing.bricks, hint=hint),
            cells=cells,
            placements=placements,
            fallbacks=list(packing.fallbacks),
            fallback_messages=messages,
            seed=self.config.seed,
            layout_attempts=layout_attempts,
            partition_attempts=partitioner.attempts,
        )

    # ------------------------------------------------------------------
    # Layout regeneration
    # ------------------------------------------------------------------
    def _connected_layout(
        self, words: List[str]
    ) -> Tuple[List[WordPlacement], List[Cell], int]:
        order = list(words)
        limit = self.config.layout_retry_limit
        for attempt in range(1, limit + 1):
            placements = [
                raw if isinstance(raw, WordPlacement) else WordPlacement.from_mapping(raw)
                for raw in self.layout_generator.generate(order)
            ]
            cells = assemble_cells(placements)
            if is_connected(cells):
                LOGGER.info("Layout attempt %d/%d connected (%d cells)", attempt, limit, len(cells))
                return placements, cells, attempt
            LOGGER.warning(
                "Layout attempt %d/%d is disconnected (%d components)",
                attempt, limit, len(connected_components(cells)),
            )
            if self.config.shuffle_words_on_retry:
                self.rng.shuffle(order)
        raise LayoutDisconnected(
            f"Layout is disconnected after {limit} attempts for words {words}"
        )

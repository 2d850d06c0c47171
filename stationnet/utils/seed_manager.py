"""Deterministic seed derivation to avoid global random.seed() order dependencies."""

from __future__ import annotations

import hashlib
from typing import Any, Optional


class SeedManager:
    """Derives per-component seeds from a single master seed.

    Each stochastic step (currently only the force-directed layout) asks for
    its own seed, so adding or reordering steps never shifts another step's
    random stream.

    Usage:
        seed_mgr = SeedManager(42)
        layout_seed = seed_mgr.derive_seed("layout")
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed for deterministic operations. If None,
                seed derivation returns None (non-deterministic).
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from the master seed and component identifiers.

        Args:
            *components: Identifiers (strings, integers, etc.) that uniquely
                name the consumer of the seed.

        Returns:
            Derived seed as a positive 32-bit integer, or None if no master seed is set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()

        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF

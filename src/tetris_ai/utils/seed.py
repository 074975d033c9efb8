# src/tetris_ai/utils/seed.py
from __future__ import annotations

"""
Deterministic seed derivation.

Benchmarks play many games from one base seed; each game gets its own
decorrelated 32-bit stream so results do not depend on play order.
No RNG state is stored here.
"""


def splitmix64(x: int) -> int:
    """
    Stateless 64-bit SplitMix hash.

    Input is treated as unsigned 64-bit; output is a uint64 as Python int.
    """
    z = (int(x) + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    z = z ^ (z >> 31)
    return int(z & 0xFFFFFFFFFFFFFFFF)


def seed32_from(*, base_seed: int, stream_id: int) -> int:
    """
    Per-game seed: seed32_from(base_seed=run_seed, stream_id=game_index).

    Same inputs give the same seed; the result is in [0, 2^31 - 1].
    """
    mixed = splitmix64((int(base_seed) << 32) ^ int(stream_id))
    return int(mixed & 0x7FFFFFFF)


__all__ = ["splitmix64", "seed32_from"]

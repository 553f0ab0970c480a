"""Synthetic round-trip samples mixing repeated-byte runs with random noise."""

from __future__ import annotations

import random

from .config import GENERATED_SEGMENTS, MAX_SEGMENT_NOISE, MAX_SEGMENT_RUN


def generate_test_data(segments: int = GENERATED_SEGMENTS, seed: int | None = None) -> bytes:
    """
    Build a sample that exercises both run tokens and literals.

    Each segment is a run of 1-99 copies of one random byte followed by 1-49
    random bytes. Runs shorter than 3 and all noise bytes end up as literals,
    and flag-valued bytes show up often enough to exercise escaping.

    Args:
        segments: Number of segments to generate.
        seed: Seed for reproducible samples.

    Returns:
        The generated sample.
    """
    if segments < 0:
        raise ValueError(f"Segment count must be non-negative, got {segments}")

    rng = random.Random(seed)
    data = bytearray()

    for _ in range(segments):
        repeat_byte = rng.randrange(256)
        data.extend(bytes((repeat_byte,)) * rng.randint(1, MAX_SEGMENT_RUN))
        data.extend(rng.randbytes(rng.randint(1, MAX_SEGMENT_NOISE)))

    return bytes(data)

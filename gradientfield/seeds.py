"""
gradientfield/seeds.py
Deterministic seed handling

CRITICAL: Do NOT use Python's built-in hash() - it's salted per-process.
All seeds must be reproducible across runs and platforms.

Randomness is never global: every consumer receives an explicit
np.random.Generator from a GenerationContext.
"""

import hashlib
import secrets
from dataclasses import dataclass

import numpy as np


def stable_u32(*parts) -> int:
    """
    Generate a stable 32-bit unsigned integer from arbitrary parts.

    Uses SHA-256 truncated to 4 bytes for cross-platform determinism.

    Example:
        stable_u32("sources", 12345) -> consistent value across runs
    """
    s = "|".join(str(p) for p in parts).encode("utf-8")
    return int.from_bytes(hashlib.sha256(s).digest()[:4], "big")


def fresh_run_seed() -> int:
    """Draw a new run seed from OS entropy (for unseeded runs)."""
    return secrets.randbits(32)


@dataclass
class GenerationContext:
    """
    Seed hierarchy for a single run.

    All randomness derives from run_seed: same run_seed -> identical
    sources, velocities and frames.

    Attributes:
        run_seed: Master seed for this run
    """
    run_seed: int

    def stream_seed(self, stream: str) -> int:
        """Seed for a named random stream (e.g. "sources", "velocities")."""
        return stable_u32("stream", self.run_seed, stream)

    def rng(self, stream: str) -> np.random.Generator:
        """
        Fresh generator for a named stream.

        Streams are independent: drawing more sources never shifts the
        velocities drawn from another stream.
        """
        return np.random.default_rng(self.stream_seed(stream))


def run_seed_from_string(s: str) -> int:
    """Convert arbitrary string to a run seed (e.g. a memorable phrase)."""
    return stable_u32("run", s)

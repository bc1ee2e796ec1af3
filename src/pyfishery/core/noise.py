"""Seedable log-normal noise for stochastic growth, catchability and recruitment.

Each simulation owns one ``NoiseGenerator``. It wraps a NumPy ``Generator``
built from a ``SeedSequence`` so that:

  - identical seeds give bit-identical trajectories
  - independent runs (parameter sweeps) get statistically independent
    streams via :meth:`NoiseGenerator.spawn`
  - a zero standard deviation never touches the random stream
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np


class NoiseGenerator:
    """Multiplicative log-normal perturbations with mean 1.

    ``log(factor) ~ Normal(-sigma**2 / 2, sigma)`` so that
    ``E[factor] == 1`` for any ``sigma``.

    Parameters
    ----------
    seed : int, optional
        Master seed. When None, fresh OS entropy is used and recorded in
        :attr:`seed` so the run can be replayed.
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed_sequence = np.random.SeedSequence(seed)
        self.seed = self._seed_sequence.entropy
        self._rng = np.random.Generator(np.random.PCG64(self._seed_sequence))

    @classmethod
    def _from_sequence(cls, seed_sequence: np.random.SeedSequence) -> "NoiseGenerator":
        gen = cls.__new__(cls)
        gen._seed_sequence = seed_sequence
        gen.seed = seed_sequence.entropy
        gen._rng = np.random.Generator(np.random.PCG64(seed_sequence))
        return gen

    def sample(self, std_dev: float) -> float:
        """Draw one mean-1 log-normal factor.

        Parameters
        ----------
        std_dev : float
            Standard deviation of the underlying normal. Must be >= 0.

        Returns
        -------
        float
            Exactly 1.0 when ``std_dev`` is 0, otherwise a positive factor.
        """
        if std_dev < 0:
            raise ValueError(f"std_dev must be non-negative, got {std_dev}")
        if std_dev == 0:
            return 1.0
        return float(np.exp(self._rng.normal(-0.5 * std_dev * std_dev, std_dev)))

    def spawn(self, n: int) -> List["NoiseGenerator"]:
        """Create ``n`` independent child generators for parallel runs."""
        return [
            NoiseGenerator._from_sequence(child)
            for child in self._seed_sequence.spawn(n)
        ]

    def get_state(self) -> dict:
        """Capture the bit generator state for checkpointing."""
        return self._rng.bit_generator.state

    def set_state(self, state: dict) -> None:
        """Restore a state captured with :meth:`get_state`."""
        self._rng.bit_generator.state = state

    def __repr__(self) -> str:
        return f"NoiseGenerator(seed={self.seed})"

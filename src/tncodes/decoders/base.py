# src/tncodes/decoders/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from tncodes.pauli import PauliOp


class Decoder(ABC):
    """Minimal decoder interface used by monte_carlo_simulation."""

    @abstractmethod
    def decode(self, syndrome: Sequence[int]) -> PauliOp:
        ...

    def decode_batch(self, syndromes: np.ndarray) -> np.ndarray:
        """Decode each row of ``syndromes``; returns corrections of shape (shots, n)."""
        syndromes = np.atleast_2d(np.asarray(syndromes, dtype=np.uint8))
        return np.array([self.decode(row) for row in syndromes], dtype=np.uint8)

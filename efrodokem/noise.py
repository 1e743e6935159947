"""Sampling of the error distribution from its CDF table."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np


def sample_n(values: Iterable[int], cdf_table: Sequence[int]) -> np.ndarray:
    """Map 16-bit pseudo-random values to noise samples.

    The low bit of each value gives the sign and the remaining 15 bits are
    compared against the CDF table. Results are returned modulo 2**16.
    """
    if len(cdf_table) == 0:
        raise ValueError("cdf_table must not be empty")
    s = np.asarray(
        values if isinstance(values, np.ndarray) else list(values), dtype=np.int64
    ).astype(np.uint16).ravel()
    prnd = (s >> 1).astype(np.int32)
    sign = (s & 1).astype(np.int32)
    thresholds = np.asarray(cdf_table[:-1], dtype=np.int32)
    sample = (thresholds[None, :] < prnd[:, None]).sum(axis=1, dtype=np.int32)
    signed = np.where(sign == 1, -sample, sample).astype(np.int64)
    return (signed & 0xFFFF).astype(np.uint16)
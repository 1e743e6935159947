"""Small-matrix arithmetic and message encoding used by the KEM."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .params import FrodoParams

_MASK16 = 0xFFFF


def _flat(values: Iterable[int]) -> np.ndarray:
    return np.asarray(
        values if isinstance(values, np.ndarray) else list(values), dtype=np.int64
    ).ravel()


def _as_matrix(values: Iterable[int], rows: int, cols: int, label: str) -> np.ndarray:
    arr = _flat(values)
    if arr.size != rows * cols:
        raise ValueError(f"{label} must hold {rows * cols} values, got {arr.size}")
    return (arr.reshape(rows, cols) & _MASK16).astype(np.uint64)


def _mask(logq: int) -> int:
    if not 1 <= logq <= 16:
        raise ValueError("logq must be between 1 and 16")
    return (1 << logq) - 1


def mul_bs(b: Iterable[int], s: Iterable[int], params: FrodoParams) -> np.ndarray:
    """Return B*S modulo q as a flat nbar x nbar array.

    ``b`` is nbar x n; ``s`` holds S transposed (nbar rows of n values).
    """
    b_m = _as_matrix(b, params.nbar, params.n, "b")
    s_t = _as_matrix(s, params.nbar, params.n, "s")
    out = (b_m @ s_t.T) & _mask(params.logq)
    return out.astype(np.uint16).ravel()


def mul_add_sb_plus_e(
    b: Iterable[int], s: Iterable[int], e: Iterable[int], params: FrodoParams
) -> np.ndarray:
    """Return S*B + E modulo q as a flat nbar x nbar array.

    ``b`` is n x nbar, ``s`` is nbar x n and ``e`` is nbar x nbar.
    """
    b_m = _as_matrix(b, params.n, params.nbar, "b")
    s_m = _as_matrix(s, params.nbar, params.n, "s")
    e_m = _as_matrix(e, params.nbar, params.nbar, "e")
    out = (s_m @ b_m + e_m) & _mask(params.logq)
    return out.astype(np.uint16).ravel()


def _elementwise(a: Iterable[int], b: Iterable[int]) -> tuple[np.ndarray, np.ndarray]:
    x, y = _flat(a), _flat(b)
    if x.shape != y.shape:
        raise ValueError("matrices must have the same number of entries")
    return x, y


def matrix_add(a: Iterable[int], b: Iterable[int], logq: int) -> np.ndarray:
    """Return a + b modulo 2**logq, entry by entry."""
    mask = _mask(logq)
    x, y = _elementwise(a, b)
    return ((x + y) & mask).astype(np.uint16)


def matrix_sub(a: Iterable[int], b: Iterable[int], logq: int) -> np.ndarray:
    """Return a - b modulo 2**logq, entry by entry."""
    mask = _mask(logq)
    x, y = _elementwise(a, b)
    return ((x - y) & mask).astype(np.uint16)


def key_encode(mu: bytes, params: FrodoParams) -> np.ndarray:
    """Spread the bits of ``mu`` over nbar x nbar entries in the high bits."""
    data = bytes(mu)
    if len(data) != params.bytes_mu:
        raise ValueError(f"mu must be {params.bytes_mu} bytes, got {len(data)}")
    bits = params.extracted_bits
    shift = params.logq - bits
    mask = (1 << bits) - 1
    out: list[int] = []
    for offset in range(0, len(data), bits):
        word = int.from_bytes(data[offset:offset + bits], "little")
        out.extend(((word >> (bits * j)) & mask) << shift for j in range(8))
    return np.asarray(out, dtype=np.uint16)


def key_decode(w: Iterable[int], params: FrodoParams) -> bytes:
    """Round each entry to its top bits and gather them back into bytes."""
    values = [int(v) for v in _flat(w)]
    count = params.nbar * params.nbar
    if len(values) != count:
        raise ValueError(f"w must hold {count} values, got {len(values)}")
    bits = params.extracted_bits
    shift = params.logq - bits
    half = 1 << (shift - 1)
    mask_ex = (1 << bits) - 1
    mask_q = (1 << params.logq) - 1
    out = bytearray()
    for start in range(0, count, 8):
        word = 0
        for j, value in enumerate(values[start:start + 8]):
            rounded = ((value & mask_q) + half) >> shift
            word |= (rounded & mask_ex) << (bits * j)
        out += word.to_bytes(bits, "little")
    return bytes(out)
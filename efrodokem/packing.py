"""Bit packing of coefficient vectors and constant-time helpers."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np


def _check_lsb(lsb: int) -> None:
    if not 1 <= lsb <= 16:
        raise ValueError("lsb must be between 1 and 16")


def pack(values: Iterable[int], lsb: int, outlen: int) -> bytes:
    """Pack the low ``lsb`` bits of each value, most significant bit first.

    The result is exactly ``outlen`` bytes: surplus bits are dropped and a
    short input is padded with zero bits.
    """
    _check_lsb(lsb)
    if outlen < 0:
        raise ValueError("outlen must be non-negative")
    mask = (1 << lsb) - 1
    v = np.asarray(list(values) if not isinstance(values, np.ndarray) else values,
                   dtype=np.int64).ravel() & mask
    shifts = np.arange(lsb - 1, -1, -1, dtype=np.int64)
    bits = ((v[:, None] >> shifts) & 1).astype(np.uint8).ravel()
    total = outlen * 8
    if bits.size < total:
        bits = np.concatenate([bits, np.zeros(total - bits.size, dtype=np.uint8)])
    else:
        bits = bits[:total]
    return np.packbits(bits).tobytes()


def unpack(data: bytes, lsb: int, count: int) -> np.ndarray:
    """Read ``count`` values of ``lsb`` bits each from ``data``.

    Missing trailing bits are taken as zero.
    """
    _check_lsb(lsb)
    if count < 0:
        raise ValueError("count must be non-negative")
    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    bits = np.unpackbits(raw)
    needed = count * lsb
    if bits.size < needed:
        bits = np.concatenate([bits, np.zeros(needed - bits.size, dtype=np.uint8)])
    bits = bits[:needed].reshape(count, lsb).astype(np.uint32)
    weights = np.left_shift(np.uint32(1), np.arange(lsb - 1, -1, -1, dtype=np.uint32))
    return (bits @ weights).astype(np.uint16)


def ct_verify(a: Iterable[int], b: Iterable[int]) -> int:
    """Return 0 if the 16-bit vectors are equal and -1 otherwise."""
    x = np.asarray(a, dtype=np.int64).astype(np.uint16)
    y = np.asarray(b, dtype=np.int64).astype(np.uint16)
    if x.shape != y.shape:
        raise ValueError("vectors must have the same length")
    diff = int(np.bitwise_or.reduce(np.bitwise_xor(x, y).ravel(), initial=0))
    return -int(diff != 0)


def ct_select(a: bytes, b: bytes, selector: int) -> bytes:
    """Return ``a`` when ``selector`` is 0 and ``b`` when it is -1."""
    if len(a) != len(b):
        raise ValueError("inputs must have the same length")
    mask = np.uint8(selector & 0xFF)
    x = np.frombuffer(bytes(a), dtype=np.uint8)
    y = np.frombuffer(bytes(b), dtype=np.uint8)
    return ((~mask & x) | (mask & y)).astype(np.uint8).tobytes()
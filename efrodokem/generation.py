"""Expansion of the public matrix A and the products that involve it."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

import numpy as np
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .params import FrodoParams, MatrixAGenerator

_MASK16 = 0xFFFF


def _check_seed(seed_a: bytes, params: FrodoParams) -> bytes:
    seed = bytes(seed_a)
    if len(seed) != params.bytes_seed_a:
        raise ValueError(
            f"seed_a must be {params.bytes_seed_a} bytes, got {len(seed)}"
        )
    return seed


def _aes_matrix(seed: bytes, params: FrodoParams) -> np.ndarray:
    n, step = params.n, params.stripe_step
    if n % step != 0:
        raise ValueError("n must be a multiple of the stripe step")
    blocks = np.zeros((n, n // step, step), dtype="<u2")
    blocks[:, :, 0] = np.arange(n, dtype=np.uint16)[:, None]
    blocks[:, :, 1] = np.arange(0, n, step, dtype=np.uint16)[None, :]
    encryptor = Cipher(algorithms.AES(seed), modes.ECB()).encryptor()
    ciphertext = encryptor.update(blocks.tobytes()) + encryptor.finalize()
    return np.frombuffer(ciphertext, dtype="<u2").reshape(n, n).astype(np.uint16)


def _shake_matrix(seed: bytes, params: FrodoParams) -> np.ndarray:
    n = params.n
    rows = (
        hashlib.shake_128(i.to_bytes(2, "little") + seed).digest(2 * n)
        for i in range(n)
    )
    return np.frombuffer(b"".join(rows), dtype="<u2").reshape(n, n).astype(np.uint16)


def generate_matrix_a(seed_a: bytes, params: FrodoParams) -> np.ndarray:
    """Expand ``seed_a`` into the n x n matrix A of 16-bit entries."""
    seed = _check_seed(seed_a, params)
    if not 0 < params.n <= 1 << 16:
        raise ValueError("n must be between 1 and 65536")
    if params.generator is MatrixAGenerator.AES128:
        return _aes_matrix(seed, params)
    return _shake_matrix(seed, params)


def _as_matrix(values: Iterable[int], rows: int, cols: int, label: str) -> np.ndarray:
    arr = np.asarray(
        values if isinstance(values, np.ndarray) else list(values), dtype=np.int64
    ).ravel()
    if arr.size != rows * cols:
        raise ValueError(f"{label} must hold {rows * cols} values, got {arr.size}")
    return (arr.reshape(rows, cols) & _MASK16).astype(np.uint64)


def mul_add_as_plus_e(
    s: Iterable[int], e: Iterable[int], seed_a: bytes, params: FrodoParams
) -> np.ndarray:
    """Return A*S + E modulo 2**16 as a flat n x nbar array.

    ``s`` holds S transposed (nbar rows of n values); ``e`` is n x nbar.
    """
    s_t = _as_matrix(s, params.nbar, params.n, "s")
    e_m = _as_matrix(e, params.n, params.nbar, "e")
    a = generate_matrix_a(seed_a, params).astype(np.uint64)
    out = (a @ s_t.T + e_m) & _MASK16
    return out.astype(np.uint16).ravel()


def mul_add_sa_plus_e(
    s: Iterable[int], e: Iterable[int], seed_a: bytes, params: FrodoParams
) -> np.ndarray:
    """Return S'*A + E' modulo 2**16 as a flat nbar x n array."""
    s_m = _as_matrix(s, params.nbar, params.n, "s")
    e_m = _as_matrix(e, params.nbar, params.n, "e")
    a = generate_matrix_a(seed_a, params).astype(np.uint64)
    out = (s_m @ a + e_m) & _MASK16
    return out.astype(np.uint16).ravel()
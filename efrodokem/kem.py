"""Ephemeral FrodoKEM key generation, encapsulation and decapsulation."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from .arith import key_decode, key_encode, matrix_add, matrix_sub, mul_add_sb_plus_e, mul_bs
from .generation import mul_add_as_plus_e, mul_add_sa_plus_e
from .noise import sample_n
from .packing import ct_select, ct_verify, pack, unpack
from .params import FrodoParams

_KEYGEN_DOMAIN = 0x5F
_ENCAPS_DOMAIN = 0x96


class KemError(RuntimeError):
    """Raised when the KEM cannot complete, e.g. no randomness is available."""


@dataclass(frozen=True)
class KeyPairEncResult:
    """Outputs of a combined key generation and encapsulation."""

    ct: bytes
    ss: bytes
    pk: bytes
    sk: bytes


def _check_length(value: bytes, expected: int, label: str) -> bytes:
    data = bytes(value)
    if len(data) != expected:
        raise ValueError(f"{label} must be {expected} bytes, got {len(data)}")
    return data


class EphemeralKEM:
    """eFrodoKEM for one parameter set and one source of randomness."""

    def __init__(
        self,
        params: FrodoParams,
        randombytes: Callable[[int], bytes] | None = None,
    ) -> None:
        self.params = params
        self._randombytes = randombytes if randombytes is not None else os.urandom

    def _random(self, count: int) -> bytes:
        try:
            data = bytes(self._randombytes(count))
        except OSError as exc:
            raise KemError("randomness source failed") from exc
        if len(data) != count:
            raise KemError(f"randomness source returned {len(data)} of {count} bytes")
        return data

    def _expand(self, domain: int, seed: bytes, count: int) -> np.ndarray:
        raw = self.params.shake(bytes([domain]) + seed, 2 * count)
        return np.frombuffer(raw, dtype="<u2").astype(np.uint16)

    def _reencrypt(
        self, seed_a: bytes, pk_b: bytes, seed_se: bytes, mu: bytes
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return (B', C) for the given seed and message; B' is modulo 2**16."""
        p = self.params
        nn = p.n * p.nbar
        r = self._expand(_ENCAPS_DOMAIN, seed_se, (2 * p.n + p.nbar) * p.nbar)
        sp = sample_n(r[:nn], p.cdf_table)
        ep = sample_n(r[nn:2 * nn], p.cdf_table)
        epp = sample_n(r[2 * nn:], p.cdf_table)
        bp = mul_add_sa_plus_e(sp, ep, seed_a, p)
        b = unpack(pk_b, p.logq, nn)
        v = mul_add_sb_plus_e(b, sp, epp, p)
        c = matrix_add(v, key_encode(mu, p), p.logq)
        return bp, c

    def keypair(self) -> tuple[bytes, bytes]:
        """Generate a key pair and return (pk, sk)."""
        p = self.params
        cb = p.crypto_bytes
        nn = p.n * p.nbar
        randomness = self._random(2 * cb + p.bytes_seed_a)
        s, seed_se, z = randomness[:cb], randomness[cb:2 * cb], randomness[2 * cb:]
        seed_a = p.shake(z, p.bytes_seed_a)

        r = self._expand(_KEYGEN_DOMAIN, seed_se, 2 * nn)
        s_mat = sample_n(r[:nn], p.cdf_table)
        e_mat = sample_n(r[nn:], p.cdf_table)
        b = mul_add_as_plus_e(s_mat, e_mat, seed_a, p)

        pk = seed_a + pack(b, p.logq, p.c1_bytes)
        sk = s + pk + s_mat.astype("<u2").tobytes() + p.shake(pk, p.bytes_pkhash)
        return pk, sk

    def encapsulate(self, pk: bytes) -> tuple[bytes, bytes]:
        """Encapsulate to ``pk`` and return (ct, ss)."""
        p = self.params
        pk = _check_length(pk, p.public_key_bytes, "pk")
        cb = p.crypto_bytes
        pkh = p.shake(pk, p.bytes_pkhash)
        mu = self._random(p.bytes_mu)
        g2 = p.shake(pkh + mu, 2 * cb)
        seed_se, k = g2[:cb], g2[cb:]

        bp, c = self._reencrypt(pk[:p.bytes_seed_a], pk[p.bytes_seed_a:], seed_se, mu)
        ct = pack(bp, p.logq, p.c1_bytes) + pack(c, p.logq, p.c2_bytes)
        ss = p.shake(ct + k, cb)
        return ct, ss

    def keypair_enc(self) -> KeyPairEncResult:
        """Generate a fresh key pair and encapsulate to it."""
        pk, sk = self.keypair()
        ct, ss = self.encapsulate(pk)
        return KeyPairEncResult(ct=ct, ss=ss, pk=pk, sk=sk)

    def decapsulate(self, ct: bytes, sk: bytes) -> bytes:
        """Recover the shared secret from ``ct`` with ``sk``.

        A ciphertext that does not re-encrypt to itself yields F(ct || s)
        instead of raising.
        """
        p = self.params
        ct = _check_length(ct, p.ciphertext_bytes, "ct")
        sk = _check_length(sk, p.secret_key_bytes, "sk")
        cb = p.crypto_bytes
        nn = p.n * p.nbar

        sk_s = sk[:cb]
        pk = sk[cb:cb + p.public_key_bytes]
        s_start = cb + p.public_key_bytes
        s_mat = np.frombuffer(sk[s_start:s_start + 2 * nn], dtype="<u2").astype(np.uint16)
        pkh = sk[s_start + 2 * nn:]

        bp = unpack(ct[:p.c1_bytes], p.logq, nn)
        c = unpack(ct[p.c1_bytes:], p.logq, p.nbar * p.nbar)
        w = matrix_sub(c, mul_bs(bp, s_mat, p), p.logq)
        mu_prime = key_decode(w, p)

        g2 = p.shake(pkh + mu_prime, 2 * cb)
        seed_se_prime, k_prime = g2[:cb], g2[cb:]
        bbp, cc = self._reencrypt(
            pk[:p.bytes_seed_a], pk[p.bytes_seed_a:], seed_se_prime, mu_prime
        )
        bbp = bbp & np.uint16(p.q - 1)

        selector = ct_verify(bp, bbp) | ct_verify(c, cc)
        fin_k = ct_select(k_prime, sk_s, selector)
        return p.shake(ct + fin_k, cb)
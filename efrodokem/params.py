"""Parameter sets for the ephemeral FrodoKEM variants."""

from __future__ import annotations

import dataclasses
import enum
import hashlib
from dataclasses import dataclass


class MatrixAGenerator(enum.Enum):
    """Primitive used to expand the public matrix A from its seed."""

    AES128 = "AES128"
    SHAKE128 = "SHAKE128"

    @property
    def suffix(self) -> str:
        return "AES" if self is MatrixAGenerator.AES128 else "SHAKE"


@dataclass(frozen=True)
class FrodoParams:
    """One eFrodoKEM parameter set together with its derived sizes."""

    name: str
    n: int
    nbar: int
    logq: int
    extracted_bits: int
    crypto_bytes: int
    cdf_table: tuple[int, ...]
    shake_variant: int
    generator: MatrixAGenerator = MatrixAGenerator.AES128
    stripe_step: int = 8
    parallel: int = 4
    bytes_seed_a: int = 16

    def __post_init__(self) -> None:
        if self.nbar % 8 != 0:
            raise ValueError("nbar must be a multiple of 8")
        if self.shake_variant not in (128, 256):
            raise ValueError("shake_variant must be 128 or 256")
        if not self.cdf_table:
            raise ValueError("cdf_table must not be empty")

    @property
    def q(self) -> int:
        return 1 << self.logq

    @property
    def bytes_mu(self) -> int:
        return (self.extracted_bits * self.nbar * self.nbar) // 8

    @property
    def bytes_pkhash(self) -> int:
        return self.crypto_bytes

    @property
    def c1_bytes(self) -> int:
        return (self.logq * self.n * self.nbar) // 8

    @property
    def c2_bytes(self) -> int:
        return (self.logq * self.nbar * self.nbar) // 8

    @property
    def public_key_bytes(self) -> int:
        return self.bytes_seed_a + self.c1_bytes

    @property
    def secret_key_bytes(self) -> int:
        return (
            self.crypto_bytes
            + self.public_key_bytes
            + 2 * self.n * self.nbar
            + self.bytes_pkhash
        )

    @property
    def ciphertext_bytes(self) -> int:
        return self.c1_bytes + self.c2_bytes

    @property
    def kat_name(self) -> str:
        """Name including the matrix generator, as used for test vectors."""
        return f"{self.name}-{self.generator.suffix}"

    def shake(self, data: bytes, outlen: int) -> bytes:
        """Hash ``data`` with the SHAKE variant of this parameter set."""
        if outlen < 0:
            raise ValueError("outlen must be non-negative")
        raw = bytes(data)
        if self.shake_variant == 128:
            return hashlib.shake_128(raw).digest(outlen)
        return hashlib.shake_256(raw).digest(outlen)


_PARAMETER_SETS: dict[int, FrodoParams] = {
    640: FrodoParams(
        name="eFrodoKEM-640",
        n=640,
        nbar=8,
        logq=15,
        extracted_bits=2,
        crypto_bytes=16,
        cdf_table=(4643, 13363, 20579, 25843, 29227, 31145, 32103,
                   32525, 32689, 32745, 32762, 32766, 32767),
        shake_variant=128,
    ),
    976: FrodoParams(
        name="eFrodoKEM-976",
        n=976,
        nbar=8,
        logq=16,
        extracted_bits=3,
        crypto_bytes=24,
        cdf_table=(5638, 15915, 23689, 28571, 31116, 32217, 32613,
                   32731, 32760, 32766, 32767),
        shake_variant=256,
    ),
    1344: FrodoParams(
        name="eFrodoKEM-1344",
        n=1344,
        nbar=8,
        logq=16,
        extracted_bits=4,
        crypto_bytes=32,
        cdf_table=(9142, 23462, 30338, 32361, 32725, 32765, 32767),
        shake_variant=256,
    ),
}


def _parse_level(name: int | str) -> int:
    if isinstance(name, bool):
        raise ValueError(f"unknown parameter set: {name!r}")
    if isinstance(name, int):
        return name
    if isinstance(name, str):
        text = name.strip()
        prefix = "efrodokem-"
        if text.lower().startswith(prefix):
            text = text[len(prefix):]
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"unknown parameter set: {name!r}") from None
    raise ValueError(f"unknown parameter set: {name!r}")


def get_params(
    name: int | str,
    generator: MatrixAGenerator | str = MatrixAGenerator.AES128,
) -> FrodoParams:
    """Return the parameter set for ``name`` (640, "976", "eFrodoKEM-1344", ...)."""
    level = _parse_level(name)
    try:
        base = _PARAMETER_SETS[level]
    except KeyError:
        raise ValueError(f"unknown parameter set: {name!r}") from None
    if isinstance(generator, str):
        generator = MatrixAGenerator(generator.upper())
    elif not isinstance(generator, MatrixAGenerator):
        raise ValueError(f"unknown matrix generator: {generator!r}")
    return dataclasses.replace(base, generator=generator)
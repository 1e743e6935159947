# efrodokem

Ephemeral FrodoKEM (eFrodoKEM), a key encapsulation mechanism whose security
rests on the learning-with-errors problem. It is meant for settings where a
key pair is used for a single encapsulation.

Three parameter sets are provided:

| Name             | Public key | Secret key | Ciphertext | Shared secret |
|------------------|-----------:|-----------:|-----------:|--------------:|
| eFrodoKEM-640    |   9616 B   |  19888 B   |   9720 B   |     16 B      |
| eFrodoKEM-976    |  15632 B   |  31296 B   |  15744 B   |     24 B      |
| eFrodoKEM-1344   |  21520 B   |  43088 B   |  21632 B   |     32 B      |

Matrix A can be generated with AES128 or with SHAKE128
(`MatrixAGenerator.AES128`, the default, or `MatrixAGenerator.SHAKE128`).

## Installation

```
pip install .
```

## Usage

```python
from efrodokem.params import MatrixAGenerator, get_params
from efrodokem.kem import EphemeralKEM

params = get_params("eFrodoKEM-640", MatrixAGenerator.AES128)
kem = EphemeralKEM(params)

# Generate a fresh key pair and encapsulate to it in one step.
result = kem.keypair_enc()          # KeyPairEncResult(ct, ss, pk, sk)

# The holder of the secret key recovers the same shared secret.
shared = kem.decapsulate(result.ct, result.sk)
assert shared == result.ss
```

`get_params` accepts `640`, `"976"` or `"eFrodoKEM-1344"`, and the generator
either as a `MatrixAGenerator` or as a string such as `"shake128"`. An unknown
name or generator raises `ValueError`. Each `FrodoParams` exposes its derived
sizes (`public_key_bytes`, `secret_key_bytes`, `ciphertext_bytes`,
`crypto_bytes`) and its hash through `FrodoParams.shake(data, outlen)`.

Key generation and encapsulation can also be run separately with
`EphemeralKEM.keypair()`, which returns `(pk, sk)`, and
`EphemeralKEM.encapsulate(pk)`, which returns `(ct, ss)`. Inputs of the wrong
length raise `ValueError`.

A tampered ciphertext does not raise; decapsulation then returns a
pseudo-random value derived from the ciphertext and the secret key
(implicit rejection), so it will not match the sender's secret.

`EphemeralKEM` takes an optional `randombytes` callable (`n -> bytes`) in
place of the default source of randomness, `os.urandom`, for instance to feed
a deterministic generator. If that source raises `OSError` or returns the
wrong number of bytes, the KEM raises `KemError`.

## Building blocks

The lower-level pieces are importable on their own:

- `efrodokem.packing`: `pack`, `unpack`, `ct_verify`, `ct_select`
- `efrodokem.noise`: `sample_n`
- `efrodokem.generation`: `generate_matrix_a`, `mul_add_as_plus_e`,
  `mul_add_sa_plus_e`
- `efrodokem.arith`: `mul_bs`, `mul_add_sb_plus_e`, `matrix_add`,
  `matrix_sub`, `key_encode`, `key_decode`

## What it does not include

There is no command-line tool and no benchmark runner. The package also has
no deterministic random generator or reader for known-answer test files;
supply your own `randombytes` callable for that.

## Running the tests

```
pip install ".[test]"
pytest
```
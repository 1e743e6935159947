import dataclasses

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from efrodokem.generation import (
    generate_matrix_a,
    mul_add_as_plus_e,
    mul_add_sa_plus_e,
)
from efrodokem.params import MatrixAGenerator, get_params

SEED = bytes(range(16))


def small(generator=MatrixAGenerator.AES128, n=16):
    return dataclasses.replace(get_params(640, generator), n=n)


GENERATORS = [MatrixAGenerator.AES128, MatrixAGenerator.SHAKE128]


def test_aes_first_block_of_zero_seed_is_aes_of_zero_block():
    a = generate_matrix_a(bytes(16), small())
    assert a[0, :8].astype("<u2").tobytes() == bytes.fromhex(
        "66e94bd4ef8a2c3b884cfa59ca342b2e"
    )


@pytest.mark.parametrize("generator", GENERATORS)
def test_matrix_shape_and_determinism(generator):
    params = small(generator)
    a1 = generate_matrix_a(SEED, params)
    a2 = generate_matrix_a(SEED, params)
    assert a1.shape == (16, 16)
    assert a1.dtype == np.uint16
    assert np.array_equal(a1, a2)


@pytest.mark.parametrize("generator", GENERATORS)
def test_different_seeds_give_different_matrices(generator):
    params = small(generator)
    other = bytes(16 - len(b"x")) + b"x"
    assert not np.array_equal(
        generate_matrix_a(SEED, params), generate_matrix_a(other, params)
    )


def test_generators_differ():
    assert not np.array_equal(
        generate_matrix_a(SEED, small(MatrixAGenerator.AES128)),
        generate_matrix_a(SEED, small(MatrixAGenerator.SHAKE128)),
    )


def test_shake_rows_are_prefix_stable_in_n():
    a_small = generate_matrix_a(SEED, small(MatrixAGenerator.SHAKE128, n=16))
    a_large = generate_matrix_a(SEED, small(MatrixAGenerator.SHAKE128, n=24))
    assert np.array_equal(a_large[:16, :16], a_small)


def test_full_size_matrix():
    params = get_params(640)
    a = generate_matrix_a(SEED, params)
    assert a.shape == (640, 640)


def test_bad_seed_length():
    with pytest.raises(ValueError):
        generate_matrix_a(b"short", small())


def test_aes_requires_stripe_multiple():
    with pytest.raises(ValueError):
        generate_matrix_a(SEED, small(n=12))


@pytest.mark.parametrize("generator", GENERATORS)
def test_as_plus_e_with_zero_s_returns_e(generator):
    params = small(generator)
    n, nbar = params.n, params.nbar
    e = np.arange(n * nbar) * 37 % 65536
    out = mul_add_as_plus_e(np.zeros(n * nbar, dtype=int), e, SEED, params)
    assert np.array_equal(out, e.astype(np.uint16))


@pytest.mark.parametrize("generator", GENERATORS)
def test_as_plus_e_unit_vectors_pick_columns(generator):
    params = small(generator)
    n, nbar = params.n, params.nbar
    s = np.zeros((nbar, n), dtype=int)
    for k in range(nbar):
        s[k, k + 3] = 1
    out = mul_add_as_plus_e(s.ravel(), np.zeros(n * nbar, dtype=int), SEED, params)
    a = generate_matrix_a(SEED, params)
    result = out.reshape(n, nbar)
    for k in range(nbar):
        assert np.array_equal(result[:, k], a[:, k + 3])


@pytest.mark.parametrize("generator", GENERATORS)
def test_sa_plus_e_unit_vectors_pick_rows(generator):
    params = small(generator)
    n, nbar = params.n, params.nbar
    s = np.zeros((nbar, n), dtype=int)
    for k in range(nbar):
        s[k, 2 * k] = 1
    out = mul_add_sa_plus_e(s.ravel(), np.zeros(n * nbar, dtype=int), SEED, params)
    a = generate_matrix_a(SEED, params)
    result = out.reshape(nbar, n)
    for k in range(nbar):
        assert np.array_equal(result[k], a[2 * k])


def test_sa_plus_e_negative_one_negates_row():
    params = small()
    n, nbar = params.n, params.nbar
    s = np.zeros((nbar, n), dtype=int)
    s[0, 5] = 0xFFFF
    out = mul_add_sa_plus_e(s.ravel(), np.zeros(n * nbar, dtype=int), SEED, params)
    a = generate_matrix_a(SEED, params).astype(np.int64)
    assert np.array_equal(out.reshape(nbar, n)[0].astype(np.int64), (-a[5]) & 0xFFFF)


@settings(max_examples=15, deadline=None)
@given(
    st.lists(st.integers(0, 0xFFFF), min_size=128, max_size=128),
    st.lists(st.integers(0, 0xFFFF), min_size=128, max_size=128),
)
def test_sa_plus_e_is_affine_in_e(s, e):
    params = small()
    zero = [0] * 128
    with_e = mul_add_sa_plus_e(s, e, SEED, params).astype(np.int64)
    without = mul_add_sa_plus_e(s, zero, SEED, params).astype(np.int64)
    assert np.array_equal((with_e - without) & 0xFFFF, np.array(e))


@settings(max_examples=15, deadline=None)
@given(
    st.lists(st.integers(0, 0xFFFF), min_size=128, max_size=128),
    st.lists(st.integers(0, 0xFFFF), min_size=128, max_size=128),
)
def test_as_plus_e_is_linear_in_s(s1, s2):
    params = small(MatrixAGenerator.SHAKE128)
    zero = [0] * 128
    total = [(x + y) & 0xFFFF for x, y in zip(s1, s2)]
    r1 = mul_add_as_plus_e(s1, zero, SEED, params).astype(np.int64)
    r2 = mul_add_as_plus_e(s2, zero, SEED, params).astype(np.int64)
    r = mul_add_as_plus_e(total, zero, SEED, params).astype(np.int64)
    assert np.array_equal((r1 + r2) & 0xFFFF, r)


def test_wrong_sizes_rejected():
    params = small()
    with pytest.raises(ValueError):
        mul_add_as_plus_e([0] * 10, [0] * 128, SEED, params)
    with pytest.raises(ValueError):
        mul_add_sa_plus_e([0] * 128, [0] * 127, SEED, params)
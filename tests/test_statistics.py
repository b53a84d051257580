"""Chi-square and serial-correlation helpers."""

import math

import pytest

from congruent.statistics import (
    bin_values,
    chi_square_sf,
    chi_square_uniformity,
    describe_uniformity,
    regularized_gamma_q,
    serial_correlation,
    standard_normal_cdf,
)


def test_chi_square_sf_two_dof_is_exponential():
    # continued-fraction branch
    for x in (4.0, 10.0, 30.0):
        assert chi_square_sf(x, 2) == pytest.approx(math.exp(-x / 2), rel=1e-9)


def test_chi_square_sf_one_dof_matches_erfc():
    # series branch
    for x in (0.5, 1.0, 2.0):
        assert chi_square_sf(x, 1) == pytest.approx(math.erfc(math.sqrt(x / 2)), rel=1e-9)


def test_chi_square_sf_critical_value():
    assert chi_square_sf(21.666, 9) == pytest.approx(0.01, abs=1e-4)
    assert chi_square_sf(16.919, 9) == pytest.approx(0.05, abs=1e-4)


def test_chi_square_sf_edges():
    assert chi_square_sf(0.0, 5) == 1.0
    with pytest.raises(ValueError):
        chi_square_sf(1.0, 0)
    with pytest.raises(ValueError):
        regularized_gamma_q(-1.0, 1.0)


def test_balanced_counts_are_uniform():
    values = list(range(10)) * 100
    res = chi_square_uniformity(values, 0, 9)
    assert res.chi_square == 0.0
    assert res.p_value == 1.0
    assert res.is_uniform
    assert res.counts == (100,) * 10
    assert res.degrees_of_freedom == 9
    assert "Consistent" in describe_uniformity(res)


def test_skewed_counts_are_rejected():
    values = [0] * 500 + list(range(10)) * 50
    res = chi_square_uniformity(values, 9, 0)
    assert res.lower == 0 and res.upper == 9
    assert not res.is_uniform
    assert res.p_value < 1e-6
    assert "rejected" in describe_uniformity(res)


def test_uniformity_rejects_bad_input():
    with pytest.raises(ValueError):
        chi_square_uniformity([0, 1, 11], 0, 9)
    with pytest.raises(ValueError):
        chi_square_uniformity([], 0, 9)
    with pytest.raises(ValueError):
        chi_square_uniformity([1, 2], 0, 9, alpha=1.5)


def test_single_value_range():
    res = chi_square_uniformity([7] * 20, 7, 7)
    assert res.degrees_of_freedom == 0
    assert res.is_uniform
    assert "Single-value" in describe_uniformity(res)


def test_alternating_sequence_is_serially_correlated():
    res = serial_correlation([0, 1] * 50)
    assert res.coefficient == pytest.approx(-0.99)
    assert res.p_value < 0.01


def test_serial_correlation_rejects_degenerate_input():
    with pytest.raises(ValueError):
        serial_correlation([1, 2])
    with pytest.raises(ValueError):
        serial_correlation([3, 3, 3, 3])


def test_standard_normal_cdf():
    assert standard_normal_cdf(0.0) == pytest.approx(0.5)
    assert standard_normal_cdf(1.959964) == pytest.approx(0.975, abs=1e-6)


def test_wide_range_must_be_binned():
    with pytest.raises(ValueError):
        chi_square_uniformity([0, 1], 0, 2**32 - 1)

    binned = bin_values([0, 2**31, 2**32 - 1], 0, 2**32 - 1, bins=100)
    assert binned == [0, 50, 99]
    assert bin_values([3, 5, 4], 5, 3, bins=100) == [0, 2, 1]

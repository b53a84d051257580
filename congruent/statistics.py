from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from . import config


_MAX_ITER = 500
_EPS = 1e-14
_TINY = 1e-300


@dataclass(frozen=True)
class UniformityResult:
    lower: int
    upper: int
    counts: Tuple[int, ...]
    expected: float
    chi_square: float
    degrees_of_freedom: int
    p_value: float
    is_uniform: bool
    sample_size: int


@dataclass(frozen=True)
class SerialCorrelationResult:
    coefficient: float
    z_score: float
    p_value: float
    sample_size: int


def standard_normal_cdf(z: float) -> float:
    """Standard normal CDF via erf (stable and dependency-free)."""
    return 0.5 * (1.0 + math.erf(z / math.sqrt(2.0)))


def _gamma_prefactor(a: float, x: float) -> float:
    return math.exp(-x + a * math.log(x) - math.lgamma(a))


def regularized_gamma_q(a: float, x: float) -> float:
    """Upper regularized incomplete gamma Q(a, x) = Gamma(a, x) / Gamma(a).

    Series expansion of P below x = a + 1, Lentz continued fraction above it
    (Numerical Recipes 6.2).
    """
    if a <= 0:
        raise ValueError("a must be > 0")
    if x < 0:
        raise ValueError("x must be >= 0")
    if x == 0:
        return 1.0

    if x < a + 1:
        term = total = 1.0 / a
        n = a
        for _ in range(_MAX_ITER):
            n += 1
            term *= x / n
            total += term
            if abs(term) < abs(total) * _EPS:
                break
        return max(0.0, 1.0 - total * _gamma_prefactor(a, x))

    b = x + 1 - a
    c = 1 / _TINY
    d = 1 / b
    h = d
    for i in range(1, _MAX_ITER):
        an = -i * (i - a)
        b += 2
        d = an * d + b
        if abs(d) < _TINY:
            d = _TINY
        c = b + an / c
        if abs(c) < _TINY:
            c = _TINY
        d = 1 / d
        delta = d * c
        h *= delta
        if abs(delta - 1) < _EPS:
            break
    return _gamma_prefactor(a, x) * h


def chi_square_sf(statistic: float, dof: int) -> float:
    """P(X >= statistic) for a chi-square variable with ``dof`` degrees of freedom."""
    if dof <= 0:
        raise ValueError("dof must be > 0")
    if statistic <= 0:
        return 1.0
    return regularized_gamma_q(dof / 2.0, statistic / 2.0)


def chi_square_uniformity(
    values: Iterable[int],
    lower: int,
    upper: int,
    alpha: float = config.UNIFORMITY_ALPHA,
) -> UniformityResult:
    """Pearson goodness-of-fit of integer draws against the uniform law on [lower, upper]."""
    if lower > upper:
        lower, upper = upper, lower
    if not (0 < alpha < 1):
        raise ValueError("alpha must be in (0, 1)")

    categories = upper - lower + 1
    if categories > config.MAX_CATEGORIES:
        raise ValueError(f"range has {categories} values; bin it to at most {config.MAX_CATEGORIES}")

    freq = Counter(values)
    outside = [v for v in freq if not (lower <= v <= upper)]
    if outside:
        raise ValueError(f"values outside [{lower}, {upper}]: {sorted(outside)[:5]}")

    n = sum(freq.values())
    if n == 0:
        raise ValueError("values must not be empty")

    counts = tuple(freq.get(v, 0) for v in range(lower, upper + 1))
    expected = n / categories
    stat = sum((c - expected) ** 2 for c in counts) / expected
    dof = categories - 1
    p_value = chi_square_sf(stat, dof) if dof > 0 else 1.0

    return UniformityResult(
        lower=lower,
        upper=upper,
        counts=counts,
        expected=expected,
        chi_square=stat,
        degrees_of_freedom=dof,
        p_value=p_value,
        is_uniform=p_value >= alpha,
        sample_size=n,
    )


def bin_values(
    values: Iterable[int],
    lower: int,
    upper: int,
    bins: int = config.HISTOGRAM_BINS,
) -> list[int]:
    """Map values on [lower, upper] to equal-width bin indices 0 .. bins - 1."""
    if lower > upper:
        lower, upper = upper, lower
    if bins <= 0:
        raise ValueError("bins must be > 0")
    span = upper - lower + 1
    bins = min(bins, span)
    return [(v - lower) * bins // span for v in values]


def serial_correlation(values: Sequence[float]) -> SerialCorrelationResult:
    """Lag-1 serial correlation (Knuth 3.3.2 K) with a normal-approximation p-value."""
    n = len(values)
    if n < 3:
        raise ValueError("need at least 3 values")

    mean = sum(values) / n
    dev = [v - mean for v in values]
    var = sum(d * d for d in dev)
    if var == 0:
        raise ValueError("values must not be constant")

    cov = sum(dev[i] * dev[i + 1] for i in range(n - 1))
    r = cov / var
    z = r * math.sqrt(n)
    p_value = 2 * (1 - standard_normal_cdf(abs(z)))

    return SerialCorrelationResult(coefficient=r, z_score=z, p_value=p_value, sample_size=n)


def describe_uniformity(result: UniformityResult) -> str:
    if result.degrees_of_freedom == 0:
        return "Single-value range; every draw is trivially the same value."

    if result.is_uniform:
        return (
            "Consistent with a uniform distribution. "
            f"chi-square = {result.chi_square:.2f} on {result.degrees_of_freedom} degrees of freedom "
            f"(p = {result.p_value:.4f}, n = {result.sample_size})."
        )

    return (
        "Uniformity rejected. "
        f"chi-square = {result.chi_square:.2f} on {result.degrees_of_freedom} degrees of freedom "
        f"(p = {result.p_value:.4g}, n = {result.sample_size}). "
        "Check the range, the sample size, or the generator's low-order bits."
    )

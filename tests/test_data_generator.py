"""Sample tables built on bounded draws and skip-ahead sub-streams."""

import pandas as pd
import pytest

from congruent import (
    LCG,
    ParkMiller,
    bin_values,
    chi_square_uniformity,
    counts_frame,
    export_to_csv,
    generate_samples,
)


def test_single_stream_matches_direct_draws():
    df = generate_samples("park_miller", seed=1, count=200, lower=0, upper=9)
    gen = ParkMiller.from_seed(1)
    assert list(df.columns) == ["stream", "draw", "value"]
    assert len(df) == 200
    assert df["value"].tolist() == [gen.bounded(0, 9) for _ in range(200)]


def test_samples_are_deterministic():
    first = generate_samples("lcg", seed=0xDEADBEEF, count=300, streams=2)
    second = generate_samples("lcg", seed=0xDEADBEEF, count=300, streams=2)
    pd.testing.assert_frame_equal(first, second)


def test_streams_start_at_their_stride():
    stride = 1_000_000
    df = generate_samples("lcg", seed=5, count=10, lower=0, upper=1000, streams=3, stride=stride)
    assert len(df) == 30
    assert sorted(df["stream"].unique().tolist()) == [0, 1, 2]

    base = LCG.from_seed(5)
    for k in range(3):
        child = base.substream(k, stride)
        expected = [child.bounded(0, 1000) for _ in range(10)]
        assert df.loc[df["stream"] == k, "value"].tolist() == expected


def test_reversed_bounds_stay_in_range():
    df = generate_samples("schrage", seed=3, count=500, lower=50, upper=10)
    assert df["value"].between(10, 50).all()


def test_invalid_arguments():
    with pytest.raises(ValueError):
        generate_samples(count=0)
    with pytest.raises(ValueError):
        generate_samples(streams=0)
    with pytest.raises(ValueError):
        generate_samples(variant="xorshift")


def test_export_to_csv_has_header_and_rows():
    df = generate_samples("lcg", seed=1, count=5)
    csv_str = export_to_csv(df)
    lines = csv_str.strip().splitlines()
    assert lines[0] == "stream,draw,value"
    assert len(lines) == 6


def test_counts_frame_names_binned_categories():
    values = list(range(10)) * 3
    res = chi_square_uniformity(values, 0, 9)
    plain = counts_frame(res)
    assert list(plain.columns) == ["value", "count"]
    assert plain["count"].tolist() == [3] * 10

    binned = bin_values([0, 2**31, 2**32 - 1], 0, 2**32 - 1)
    res = chi_square_uniformity(binned, 0, 99)
    frame = counts_frame(res, binned=True)
    assert list(frame.columns) == ["bin", "count"]
    assert frame["bin"].tolist() == list(range(100))
    assert frame["count"].sum() == 3

"""Tests for the streaming moment accumulators."""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.stats.accumulators import CoMomentAccumulator, MomentAccumulator


def test_moment_accumulator_tracks_mean_and_m2() -> None:
    values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
    acc = MomentAccumulator().extend(values)
    assert acc.count == 8
    assert acc.mean == pytest.approx(5.0)
    assert acc.m2 == pytest.approx(32.0)
    assert acc.total == pytest.approx(40.0)


def test_moment_accumulator_is_stable_for_large_offsets() -> None:
    offset = 1e12
    values = [offset + delta for delta in (1.0, 2.0, 3.0, 4.0, 5.0)]
    acc = MomentAccumulator().extend(values)
    assert acc.m2 / acc.count == pytest.approx(2.0, rel=1e-6)


def test_moment_merge_matches_single_pass() -> None:
    rng = np.random.default_rng(3)
    values = rng.normal(50000.0, 12000.0, size=101).tolist()
    whole = MomentAccumulator().extend(values)
    merged = MomentAccumulator().extend(values[:40]).merge(MomentAccumulator().extend(values[40:]))
    assert merged.count == whole.count
    assert merged.mean == pytest.approx(whole.mean, rel=1e-12)
    assert merged.m2 == pytest.approx(whole.m2, rel=1e-9)


def test_moment_merge_with_empty_side() -> None:
    acc = MomentAccumulator().extend([1.0, 3.0])
    assert MomentAccumulator().merge(acc) == acc
    assert acc.merge(MomentAccumulator()) == acc


def test_comoment_accumulator_matches_numpy() -> None:
    rng = np.random.default_rng(11)
    xs = rng.uniform(0.0, 60.0, size=50)
    ys = 1000.0 * xs + rng.normal(0.0, 5000.0, size=50)
    acc = CoMomentAccumulator().extend(zip(xs.tolist(), ys.tolist()))

    assert acc.count == 50
    assert acc.mean_x == pytest.approx(xs.mean())
    assert acc.mean_y == pytest.approx(ys.mean())
    assert acc.m2_x == pytest.approx(((xs - xs.mean()) ** 2).sum(), rel=1e-9)
    assert acc.c_xy == pytest.approx(((xs - xs.mean()) * (ys - ys.mean())).sum(), rel=1e-9)
    assert acc.pearson() == pytest.approx(np.corrcoef(xs, ys)[0, 1], rel=1e-9)


def test_comoment_swapped_and_merge() -> None:
    pairs = [(1.0, 2.0), (2.0, 1.0), (4.0, 7.0), (8.0, 5.0), (3.0, 3.0)]
    acc = CoMomentAccumulator().extend(pairs)
    swapped = CoMomentAccumulator().extend((y, x) for x, y in pairs)
    assert acc.swapped() == swapped

    merged = CoMomentAccumulator().extend(pairs[:2]).merge(CoMomentAccumulator().extend(pairs[2:]))
    assert merged.count == acc.count
    assert merged.c_xy == pytest.approx(acc.c_xy)
    assert merged.m2_y == pytest.approx(acc.m2_y)


def test_pearson_is_clamped() -> None:
    acc = CoMomentAccumulator(count=3, m2_x=1.0, m2_y=1.0, c_xy=1.0000000001)
    assert acc.pearson() == 1.0

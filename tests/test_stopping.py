import math

import pytest

from hoeffding_tree.stopping import (
    check_post_split_stopping_condition,
    check_pre_split_stopping_conditions,
    hoeffding_bound,
    rank_gains,
)


def test_hoeffding_bound_formula():
    expected = math.sqrt(0.25 * math.log(1 / 0.05) / (2 * 100))
    assert hoeffding_bound(0.5, 0.95, 100) == pytest.approx(expected)


def test_hoeffding_bound_shrinks_with_samples():
    bounds = [hoeffding_bound(0.5, 0.95, n) for n in (10, 100, 1000, 10000)]
    assert bounds == sorted(bounds, reverse=True)
    assert hoeffding_bound(0.5, 0.95, 0) == math.inf
    assert hoeffding_bound(0.0, 0.95, 10) == 0.0


def test_hoeffding_bound_grows_with_confidence():
    assert hoeffding_bound(0.5, 0.99, 100) > hoeffding_bound(0.5, 0.9, 100)


@pytest.mark.parametrize("confidence", [0.0, 1.0, -0.5, 2.0])
def test_hoeffding_bound_rejects_bad_confidence(confidence):
    with pytest.raises(ValueError):
        hoeffding_bound(0.5, confidence, 10)


def test_rank_gains():
    assert rank_gains([0.1, 0.4, 0.3]) == (1, 0.4, 0.3)
    assert rank_gains([0.2]) == (0, 0.2, 0.0)
    assert rank_gains([0.3, 0.3]) == (0, 0.3, 0.3)
    assert rank_gains([]) == (None, 0.0, 0.0)


def test_pre_split_conditions():
    assert check_pre_split_stopping_conditions(0, [0, 0]) == "no_samples"
    assert check_pre_split_stopping_conditions(10, [5, 5], current_depth=3, max_depth=3).startswith("max_depth")
    assert check_pre_split_stopping_conditions(10, [5, 5], min_samples=20).startswith("min_samples")
    assert check_pre_split_stopping_conditions(10, [5, 5], check_interval=3).startswith("check_interval")
    assert check_pre_split_stopping_conditions(10, [0, 10, 0]).startswith("pure_node")
    assert check_pre_split_stopping_conditions(10, [5, 5]) is None
    assert check_pre_split_stopping_conditions(12, [6, 6], min_samples=12, check_interval=3) is None


def test_post_split_hoeffding_margin():
    should_split, reason = check_post_split_stopping_condition(0.5, 0.1, 0.2, 0.05)
    assert should_split
    assert reason.startswith("hoeffding_bound")


def test_post_split_margin_within_bound():
    should_split, reason = check_post_split_stopping_condition(0.3, 0.2, 0.2, 0.05)
    assert not should_split
    assert reason.startswith("hoeffding_stop")


def test_post_split_zero_gain_never_splits():
    should_split, reason = check_post_split_stopping_condition(0.0, 0.0, 0.0, 0.05, max_samples=1, num_samples=10)
    assert not should_split
    assert reason == "no_positive_gain"

    should_split, _ = check_post_split_stopping_condition(1e-12, 0.0, 1e-13, 0.05)
    assert not should_split


def test_post_split_tie_threshold_and_max_samples():
    should_split, reason = check_post_split_stopping_condition(0.3, 0.3, 0.01, 0.05)
    assert should_split and reason.startswith("tie_threshold")

    should_split, reason = check_post_split_stopping_condition(0.3, 0.3, 0.2, 0.05, num_samples=50, max_samples=50)
    assert should_split and reason.startswith("max_samples")


def test_post_split_tie_rule_accepts_noise_level_gains_unless_disabled():
    # Two near-identical noise gains with a small epsilon.
    should_split, reason = check_post_split_stopping_condition(0.002, 0.0019, 0.01, 0.05)
    assert should_split and reason.startswith("tie_threshold")

    should_split, reason = check_post_split_stopping_condition(0.002, 0.0019, 0.01, 0.0)
    assert not should_split
    assert reason.startswith("hoeffding_stop")


def test_post_split_verbose_output(capsys):
    check_post_split_stopping_condition(0.3, 0.2, 0.2, 0.05, num_samples=12, verbose=True)
    output = capsys.readouterr().out
    assert "Hoeffding Check (n=12)" in output
    assert "Decision: no split" in output

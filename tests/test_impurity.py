import numpy as np
import pytest

from hoeffding_tree.impurity import (
    GiniImpurity,
    InformationGain,
    evaluate,
    gain,
    get_fitness_function,
    gini_impurity,
    impurity_range,
)


def test_single_class_per_category_has_zero_impurity():
    assert evaluate([[10, 0], [12, 0]]) == pytest.approx(0.0, abs=1e-10)
    assert evaluate([[10, 0], [0, 12]]) == pytest.approx(0.0, abs=1e-10)
    assert evaluate([[0, 0, 7], [3, 0, 0], [0, 9, 0]]) == pytest.approx(0.0, abs=1e-10)


def test_single_class_table_has_no_gain():
    assert gain([[10, 0], [12, 0]]) == pytest.approx(0.0, abs=1e-10)


@pytest.mark.parametrize("shape", [(1, 1), (2, 2), (3, 5), (10, 10)])
def test_all_zero_table_has_zero_impurity(shape):
    table = np.zeros(shape, dtype=np.int64)
    assert evaluate(table) == 0.0
    assert gain(table) == 0.0


@pytest.mark.parametrize(
    "num_classes, expected",
    [(1, 0.0), (2, 0.5), (3, 0.66666667), (4, 0.75), (5, 0.8), (10, 0.9), (100, 0.99), (1000, 0.999)],
)
def test_range(num_classes, expected):
    assert impurity_range(num_classes) == pytest.approx(expected, rel=1e-5, abs=1e-12)
    assert GiniImpurity.range(num_classes) == pytest.approx(expected, rel=1e-5, abs=1e-12)


def test_range_rejects_zero_classes():
    with pytest.raises(ValueError):
        impurity_range(0)


def test_perfect_split_gain():
    table = [[10, 0], [0, 10]]
    assert evaluate(table) == pytest.approx(0.0, abs=1e-10)
    assert gini_impurity([10, 10]) == pytest.approx(0.5)
    assert gain(table) == pytest.approx(0.5)


def test_useless_split_gain():
    assert gain([[10, 10], [5, 5]]) == pytest.approx(0.0, abs=1e-10)


def test_three_class_four_category_table():
    table = [[0, 0, 10], [5, 5, 0], [4, 4, 4], [8, 1, 1]]
    # Weighted post-split impurity: (10*0 + 10*0.5 + 12*2/3 + 10*0.34) / 42.
    assert evaluate(table) == pytest.approx(16.4 / 42, abs=1e-6)
    assert gini_impurity([17, 10, 15]) == pytest.approx(0.65193, abs=1e-5)
    assert gain(table) == pytest.approx(0.26145, rel=1e-3)


def test_evaluate_stays_below_one():
    rng = np.random.default_rng(3)
    for _ in range(20):
        table = rng.integers(0, 50, size=(4, 6))
        assert 0.0 <= evaluate(table) < 1.0


def test_negative_counts_rejected():
    with pytest.raises(ValueError):
        evaluate([[1, -1], [0, 2]])


def test_information_gain():
    assert InformationGain.gain([[10, 0], [0, 10]]) == pytest.approx(1.0)
    assert InformationGain.gain([[10, 10], [5, 5]]) == pytest.approx(0.0, abs=1e-10)
    assert InformationGain.range(2) == pytest.approx(1.0)
    assert InformationGain.range(4) == pytest.approx(2.0)
    assert InformationGain.evaluate(np.zeros((3, 3))) == 0.0


def test_get_fitness_function():
    assert get_fitness_function("gini") is GiniImpurity
    assert get_fitness_function("info_gain") is InformationGain
    assert get_fitness_function(GiniImpurity) is GiniImpurity
    with pytest.raises(ValueError):
        get_fitness_function("variance")

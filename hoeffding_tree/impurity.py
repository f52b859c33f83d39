# hoeffding_tree/impurity.py
import math
import numpy as np


def _as_count_table(table):
    counts = np.asarray(table, dtype=float)
    if counts.ndim == 1:
        counts = counts.reshape(1, -1)
    if counts.ndim != 2:
        raise ValueError(f"Count table must be 2-dimensional, got shape {counts.shape}.")
    if np.any(counts < 0):
        raise ValueError("Count table cannot contain negative counts.")
    return counts


def gini_impurity(class_counts):
    """
    Gini impurity 1 - sum_c p_c^2 of a single class distribution.
    An empty distribution (all counts zero) has impurity 0.
    """
    counts = np.asarray(class_counts, dtype=float)
    total = counts.sum()
    if total == 0:
        return 0.0
    proportions = counts / total
    return float(1.0 - np.sum(proportions * proportions))


def evaluate(table):
    """
    Weighted mean Gini impurity of a (category x class) count table.

    Each category row is scored with its own Gini impurity and weighted by its
    share of the total count. This is the impurity *after* splitting on the
    categories; the gain of the split is gini_impurity(column sums) - evaluate(table).

    Args:
        table (array-like): Count table of shape (num_categories, num_classes).

    Returns:
        float: Weighted impurity in [0, 1). Returns 0.0 for an all-zero table.
    """
    counts = _as_count_table(table)
    row_sums = counts.sum(axis=1)
    total = row_sums.sum()
    if total == 0:
        return 0.0

    impurity = 0.0
    for row, row_sum in zip(counts, row_sums):
        if row_sum == 0:
            continue
        impurity += (row_sum / total) * gini_impurity(row)
    return float(impurity)


def gain(table):
    """Gini gain of splitting the marginal class distribution into the table's rows."""
    counts = _as_count_table(table)
    return gini_impurity(counts.sum(axis=0)) - evaluate(counts)


def impurity_range(num_classes):
    """
    Largest possible Gini impurity over num_classes classes, 1 - 1/k.
    Used as the range R of the Hoeffding bound.
    """
    if num_classes < 1:
        raise ValueError(f"num_classes must be at least 1, got {num_classes}.")
    return 1.0 - 1.0 / num_classes


def entropy(class_counts):
    """Shannon entropy (bits) of a single class distribution. 0.0 when empty."""
    counts = np.asarray(class_counts, dtype=float)
    total = counts.sum()
    if total == 0:
        return 0.0
    proportions = counts[counts > 0] / total
    return float(-np.sum(proportions * np.log2(proportions)))


def evaluate_entropy(table):
    """Weighted mean entropy of a (category x class) count table."""
    counts = _as_count_table(table)
    row_sums = counts.sum(axis=1)
    total = row_sums.sum()
    if total == 0:
        return 0.0

    weighted = 0.0
    for row, row_sum in zip(counts, row_sums):
        if row_sum == 0:
            continue
        weighted += (row_sum / total) * entropy(row)
    return float(weighted)


class GiniImpurity:
    """Gini fitness function used to score split candidates."""

    name = "gini"

    @staticmethod
    def evaluate(table):
        return evaluate(table)

    @staticmethod
    def gain(table):
        return gain(table)

    @staticmethod
    def range(num_classes):
        return impurity_range(num_classes)


class InformationGain:
    """Entropy based fitness function. Gains are measured in bits."""

    name = "info_gain"

    @staticmethod
    def evaluate(table):
        return evaluate_entropy(table)

    @staticmethod
    def gain(table):
        counts = _as_count_table(table)
        return entropy(counts.sum(axis=0)) - evaluate_entropy(counts)

    @staticmethod
    def range(num_classes):
        if num_classes < 1:
            raise ValueError(f"num_classes must be at least 1, got {num_classes}.")
        return math.log2(num_classes)


FITNESS_FUNCTIONS = {
    GiniImpurity.name: GiniImpurity,
    InformationGain.name: InformationGain,
}


def get_fitness_function(name_or_function):
    """Resolves a fitness function given by name ('gini', 'info_gain') or passed directly."""
    if isinstance(name_or_function, str):
        if name_or_function not in FITNESS_FUNCTIONS:
            raise ValueError(
                f"Unknown fitness function '{name_or_function}'. Expected one of {sorted(FITNESS_FUNCTIONS)}."
            )
        return FITNESS_FUNCTIONS[name_or_function]
    return name_or_function


if __name__ == '__main__':
    separable = [[10, 0], [0, 10]]
    print(f"evaluate({separable}): {evaluate(separable)}")  # 0.0
    print(f"gain({separable}): {gain(separable)}")  # 0.5

    three_class = [[0, 0, 10], [5, 5, 0], [4, 4, 4], [8, 1, 1]]
    print(f"evaluate(three_class): {evaluate(three_class):.5f}")  # ~0.39048
    print(f"gain(three_class): {gain(three_class):.5f}")  # ~0.26145

    for k in (1, 2, 3, 10):
        print(f"impurity_range({k}): {impurity_range(k)}")

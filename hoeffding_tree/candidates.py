# hoeffding_tree/candidates.py
import numpy as np

from .impurity import GiniImpurity, get_fitness_function
from .utils import check_index, check_finite


class CategoricalSplitInfo:
    """Routes a category code to the child created for that category."""

    def __init__(self, num_categories):
        self.num_categories = num_categories

    def calculate_direction(self, value):
        """Child index for value, or None when value is not a known category code."""
        try:
            return check_index(value, self.num_categories, "Category")
        except ValueError:
            return None

    def describe(self, dimension_name, direction):
        return f"{dimension_name} == code({direction})"

    def __repr__(self):
        return f"CategoricalSplitInfo(num_categories={self.num_categories})"


class NumericSplitInfo:
    """Routes a numeric value to the bin it falls into. Bin i covers [points[i-1], points[i])."""

    def __init__(self, split_points):
        self.split_points = np.asarray(split_points, dtype=float)

    @property
    def num_children(self):
        return self.split_points.size + 1

    def calculate_direction(self, value):
        try:
            value = check_finite(value)
        except ValueError:
            return None
        return int(np.searchsorted(self.split_points, value, side='right'))

    def describe(self, dimension_name, direction):
        if self.split_points.size == 0:
            return f"{dimension_name} (any)"
        if direction == 0:
            return f"{dimension_name} < {self.split_points[0]:.3f}"
        if direction == self.split_points.size:
            return f"{dimension_name} >= {self.split_points[-1]:.3f}"
        return f"{self.split_points[direction - 1]:.3f} <= {dimension_name} < {self.split_points[direction]:.3f}"

    def __repr__(self):
        return f"NumericSplitInfo(split_points={self.split_points.tolist()})"


def _default_node_factory(dataset_info, num_classes):
    # Local import: tree.py depends on this module through the split engine.
    from .tree import StreamingDecisionTree

    def factory():
        return StreamingDecisionTree(dataset_info, num_classes)
    return factory


class CategoricalSplit:
    """
    Sufficient statistics for splitting a node on one categorical dimension:
    a (num_categories x num_classes) table of counts. Splitting creates one
    child per category.
    """

    def __init__(self, num_categories, num_classes, fitness_function=GiniImpurity):
        if num_categories < 1:
            raise ValueError(f"num_categories must be at least 1, got {num_categories}.")
        if num_classes < 1:
            raise ValueError(f"num_classes must be at least 1, got {num_classes}.")
        self.num_categories = int(num_categories)
        self.num_classes = int(num_classes)
        self.fitness_function = get_fitness_function(fitness_function)
        self.sufficient_statistics = np.zeros((self.num_categories, self.num_classes), dtype=np.int64)

    def validate(self, category, label):
        """Returns (category, label) as ints, raising ValueError if either is out of range."""
        return (
            check_index(category, self.num_categories, "Category"),
            check_index(label, self.num_classes, "Class label"),
        )

    def train(self, category, label):
        category, label = self.validate(category, label)
        self.sufficient_statistics[category, label] += 1

    @property
    def num_samples(self):
        return int(self.sufficient_statistics.sum())

    def class_counts(self):
        return self.sufficient_statistics.sum(axis=0)

    def majority_class(self):
        # np.argmax picks the lowest index on ties, and 0 for an all-zero vector.
        return int(np.argmax(self.class_counts()))

    def evaluate_fitness_function(self):
        """Fitness gain of splitting on this dimension now. Never negative."""
        return max(0.0, float(self.fitness_function.gain(self.sufficient_statistics)))

    def create_children(self, dataset_info, node_factory=None):
        """
        Creates one fresh leaf per category.

        Args:
            dataset_info (DatasetInfo): Feature metadata handed to the new leaves.
            node_factory (callable, optional): Zero-argument callable returning a new leaf.
                Defaults to a StreamingDecisionTree over dataset_info.

        Returns:
            tuple: (children, split_info) with split_info.calculate_direction(c) == c.
        """
        if node_factory is None:
            node_factory = _default_node_factory(dataset_info, self.num_classes)
        children = [node_factory() for _ in range(self.num_categories)]
        return children, CategoricalSplitInfo(self.num_categories)

    def __repr__(self):
        return (f"CategoricalSplit(num_categories={self.num_categories}, num_classes={self.num_classes}, "
                f"samples={self.num_samples})")


class NumericSplit:
    """
    Sufficient statistics for splitting a node on one numerical dimension.

    The first observations_before_binning values are buffered. Once the buffer
    is full, bins - 1 evenly spaced split points are fixed between the buffered
    minimum and maximum, the buffer is replayed into a (bins x num_classes)
    count table and released. Until then the fitness is 0.
    """

    def __init__(self, num_classes, bins=10, observations_before_binning=100, fitness_function=GiniImpurity):
        if num_classes < 1:
            raise ValueError(f"num_classes must be at least 1, got {num_classes}.")
        if bins < 2:
            raise ValueError(f"bins must be at least 2, got {bins}.")
        if observations_before_binning < 1:
            raise ValueError(f"observations_before_binning must be at least 1, got {observations_before_binning}.")
        self.num_classes = int(num_classes)
        self.bins = int(bins)
        self.observations_before_binning = int(observations_before_binning)
        self.fitness_function = get_fitness_function(fitness_function)

        self._observations = np.empty(self.observations_before_binning, dtype=float)
        self._labels = np.empty(self.observations_before_binning, dtype=np.int64)
        self._samples_seen = 0
        self._class_counts = np.zeros(self.num_classes, dtype=np.int64)
        self.split_points = None
        self.sufficient_statistics = None

    @property
    def is_binned(self):
        return self.split_points is not None

    @property
    def num_samples(self):
        return self._samples_seen

    def validate(self, value, label):
        return check_finite(value, "Numeric value"), check_index(label, self.num_classes, "Class label")

    def train(self, value, label):
        value, label = self.validate(value, label)
        self._class_counts[label] += 1
        if self.is_binned:
            self.sufficient_statistics[self._bin_index(value), label] += 1
            self._samples_seen += 1
            return

        self._observations[self._samples_seen] = value
        self._labels[self._samples_seen] = label
        self._samples_seen += 1
        if self._samples_seen == self.observations_before_binning:
            self._bin_observations()

    def _bin_index(self, value):
        return int(np.searchsorted(self.split_points, value, side='right'))

    def _bin_observations(self):
        observations = self._observations[:self._samples_seen]
        labels = self._labels[:self._samples_seen]
        low, high = observations.min(), observations.max()

        self.split_points = np.linspace(low, high, self.bins + 1)[1:-1]
        self.sufficient_statistics = np.zeros((self.bins, self.num_classes), dtype=np.int64)
        bin_indices = np.searchsorted(self.split_points, observations, side='right')
        np.add.at(self.sufficient_statistics, (bin_indices, labels), 1)

        self._observations = None
        self._labels = None

    def class_counts(self):
        return self._class_counts.copy()

    def majority_class(self):
        return int(np.argmax(self._class_counts))

    def evaluate_fitness_function(self):
        if not self.is_binned:
            return 0.0
        return max(0.0, float(self.fitness_function.gain(self.sufficient_statistics)))

    def create_children(self, dataset_info, node_factory=None):
        """Creates one fresh leaf per bin. Bins early if the buffer is not yet full."""
        if not self.is_binned:
            if self._samples_seen == 0:
                raise ValueError("Cannot create children for a numeric split with no observations.")
            self._bin_observations()
        if node_factory is None:
            node_factory = _default_node_factory(dataset_info, self.num_classes)
        children = [node_factory() for _ in range(self.bins)]
        return children, NumericSplitInfo(self.split_points)

    def __repr__(self):
        return (f"NumericSplit(bins={self.bins}, num_classes={self.num_classes}, "
                f"samples={self.num_samples}, binned={self.is_binned})")

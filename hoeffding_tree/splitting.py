# hoeffding_tree/splitting.py
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .candidates import CategoricalSplit, NumericSplit
from .impurity import get_fitness_function
from .stopping import (
    check_post_split_stopping_condition,
    check_pre_split_stopping_conditions,
    hoeffding_bound,
    rank_gains,
)
from .utils import check_index, check_point


@dataclass(frozen=True)
class SplitDecision:
    """Outcome of a split check. Truthy only when a split was decided."""

    dimension: int | None
    reason: str
    epsilon: float = math.inf
    best_gain: float = 0.0
    second_gain: float = 0.0
    num_samples: int = 0

    @property
    def should_split(self) -> bool:
        return self.dimension is not None

    def __bool__(self) -> bool:
        return self.should_split


class HoeffdingSplit:
    """
    Split decision engine for one leaf.

    Owns one split candidate per input dimension (CategoricalSplit for
    categorical dimensions, NumericSplit for numerical ones), the number of
    examples seen and the per-class counts. Every example updates all
    candidates, so each candidate always holds exactly num_samples observations.

    split_check() decides, via the Hoeffding bound, whether the best dimension
    is better than the runner-up with probability at least `confidence`.
    """

    def __init__(
        self,
        num_dimensions: int,
        num_classes: int,
        dataset_info,
        confidence: float = 0.95,
        tie_threshold: float = 0.05,
        min_samples: int = 0,
        check_interval: int = 1,
        max_samples: int | None = None,
        bins: int = 10,
        observations_before_binning: int = 100,
        fitness_function="gini",
        default_class: int = 0,
        depth: int = 0,
        max_depth: int | None = None,
        verbose: bool = False,
    ):
        if num_dimensions < 1:
            raise ValueError(f"num_dimensions must be at least 1, got {num_dimensions}.")
        if num_classes < 1:
            raise ValueError(f"num_classes must be at least 1, got {num_classes}.")
        if dataset_info.dimensionality < num_dimensions:
            raise ValueError(
                f"Dataset info describes {dataset_info.dimensionality} dimensions, {num_dimensions} requested."
            )
        if not 0.0 < confidence < 1.0:
            raise ValueError(f"confidence must be in (0, 1), got {confidence}.")
        if tie_threshold < 0:
            raise ValueError(f"tie_threshold must be non-negative, got {tie_threshold}.")
        if check_interval < 1:
            raise ValueError(f"check_interval must be at least 1, got {check_interval}.")
        if min_samples < 0:
            raise ValueError(f"min_samples must be non-negative, got {min_samples}.")

        self.num_dimensions = int(num_dimensions)
        self.num_classes = int(num_classes)
        self.dataset_info = dataset_info
        self.confidence = confidence
        self.tie_threshold = tie_threshold
        self.min_samples = min_samples
        self.check_interval = check_interval
        self.max_samples = max_samples
        self.bins = bins
        self.observations_before_binning = observations_before_binning
        self.fitness_function = get_fitness_function(fitness_function)
        self.default_class = check_index(default_class, self.num_classes, "Default class")
        self.depth = depth
        self.max_depth = max_depth
        self.verbose = verbose

        self.candidates = [self._make_candidate(d) for d in range(self.num_dimensions)]
        self.num_samples = 0
        self.class_counts = np.zeros(self.num_classes, dtype=np.int64)

    def _make_candidate(self, dimension):
        if self.dataset_info.is_categorical(dimension):
            return CategoricalSplit(
                self.dataset_info.num_mappings(dimension), self.num_classes, self.fitness_function
            )
        return NumericSplit(
            self.num_classes,
            bins=self.bins,
            observations_before_binning=self.observations_before_binning,
            fitness_function=self.fitness_function,
        )

    def train(self, point, label):
        """
        Adds one labeled example to every dimension's candidate.
        All values are validated first, so a rejected example changes nothing.
        """
        point = check_point(point, self.num_dimensions)
        label = check_index(label, self.num_classes, "Class label")
        for dimension, candidate in enumerate(self.candidates):
            try:
                candidate.validate(point[dimension], label)
            except ValueError as e:
                raise ValueError(f"Dimension {dimension}: {e}") from e

        for dimension, candidate in enumerate(self.candidates):
            candidate.train(point[dimension], label)
        self.num_samples += 1
        self.class_counts[label] += 1

    def majority_class(self) -> int:
        if self.num_samples == 0:
            return self.default_class
        return int(np.argmax(self.class_counts))

    def majority_probability(self) -> float:
        if self.num_samples == 0:
            return 0.0
        return float(self.class_counts.max() / self.num_samples)

    def fitness_gains(self) -> np.ndarray:
        return np.array([candidate.evaluate_fitness_function() for candidate in self.candidates])

    def split_check(self) -> SplitDecision:
        stop_reason = check_pre_split_stopping_conditions(
            num_samples=self.num_samples, class_counts=self.class_counts,
            min_samples=self.min_samples, check_interval=self.check_interval,
            current_depth=self.depth, max_depth=self.max_depth
        )
        if stop_reason:
            return SplitDecision(dimension=None, reason=stop_reason, num_samples=self.num_samples)

        best_dimension, best_gain, second_gain = rank_gains(self.fitness_gains())
        value_range = self.fitness_function.range(self.num_classes)
        epsilon = hoeffding_bound(value_range, self.confidence, self.num_samples)

        should_split, reason = check_post_split_stopping_condition(
            best_gain=best_gain, second_gain=second_gain, epsilon=epsilon,
            tie_threshold=self.tie_threshold, num_samples=self.num_samples,
            max_samples=self.max_samples, verbose=self.verbose, node_depth_for_logs=self.depth
        )
        return SplitDecision(
            dimension=best_dimension if should_split else None,
            reason=reason,
            epsilon=epsilon,
            best_gain=best_gain,
            second_gain=second_gain,
            num_samples=self.num_samples,
        )

    def create_children(self, dimension, node_factory=None):
        """Creates the children for a split on dimension. Returns (children, split_info)."""
        dimension = check_index(dimension, self.num_dimensions, "Dimension")
        return self.candidates[dimension].create_children(self.dataset_info, node_factory)

    def __repr__(self):
        return (f"HoeffdingSplit(dimensions={self.num_dimensions}, classes={self.num_classes}, "
                f"samples={self.num_samples}, confidence={self.confidence})")

# hoeffding_tree/tree.py
import time
import uuid
import numpy as np

from .metadata import DatasetInfo
from .splitting import HoeffdingSplit
from .utils import check_point, to_records


class StreamingDecisionTree:
    """
    A node of a Hoeffding tree, grown one example at a time.

    A node starts as a leaf owning a HoeffdingSplit engine. When a split check
    after training decides to split, the chosen candidate creates the children
    and the node turns into an internal node in place: it keeps the split
    dimension, the routing rule and a snapshot of its majority class, and drops
    the engine. The root is created directly; every other node comes from
    create_children.
    """

    def __init__(
        self,
        dataset_info,
        num_classes,
        depth=0,
        majority_class=0,
        max_depth=None,
        confidence=0.95,
        tie_threshold=0.05,
        min_samples=0,
        check_interval=1,
        max_samples=None,
        bins=10,
        observations_before_binning=100,
        fitness_function="gini",
        verbose=False
    ):
        self.id = uuid.uuid4()
        self.dataset_info = dataset_info
        self.num_classes = num_classes
        self.depth = depth
        self.max_depth = max_depth
        self.confidence = confidence
        self.tie_threshold = tie_threshold
        self.min_samples = min_samples
        self.check_interval = check_interval
        self.max_samples = max_samples
        self.bins = bins
        self.observations_before_binning = observations_before_binning
        self.fitness_function = fitness_function
        self.verbose = verbose

        self.split = HoeffdingSplit(
            dataset_info.dimensionality, num_classes, dataset_info,
            confidence=confidence, tie_threshold=tie_threshold,
            min_samples=min_samples, check_interval=check_interval, max_samples=max_samples,
            bins=bins, observations_before_binning=observations_before_binning,
            fitness_function=fitness_function, default_class=majority_class,
            depth=depth, max_depth=max_depth, verbose=verbose
        )
        self.num_samples = 0
        self.children = []
        self.split_dimension = None
        self.split_info = None
        self.split_decision = None
        self._majority_class = majority_class
        self._majority_probability = 0.0

    @property
    def is_leaf(self):
        return self.split is not None

    def get_params(self):
        return {
            'max_depth': self.max_depth,
            'confidence': self.confidence,
            'tie_threshold': self.tie_threshold,
            'min_samples': self.min_samples,
            'check_interval': self.check_interval,
            'max_samples': self.max_samples,
            'bins': self.bins,
            'observations_before_binning': self.observations_before_binning,
            'fitness_function': self.fitness_function,
            'verbose': self.verbose
        }

    def _spawn_child(self):
        return StreamingDecisionTree(
            self.dataset_info, self.num_classes,
            depth=self.depth + 1, majority_class=self.split.majority_class(),
            **self.get_params()
        )

    def _route(self, point):
        direction = self.split_info.calculate_direction(point[self.split_dimension])
        if direction is None or direction >= len(self.children):
            return None
        return direction

    def train(self, point, label):
        """Routes the example to its leaf, trains that leaf and splits it if the Hoeffding test says so."""
        point = check_point(point, self.dataset_info.dimensionality)
        if not self.is_leaf:
            direction = self._route(point)
            if direction is None:
                raise ValueError(
                    f"Value {point[self.split_dimension]!r} in dimension {self.split_dimension} "
                    f"cannot be routed by {self.split_info!r}."
                )
            self.children[direction].train(point, label)
            self.num_samples += 1
            return

        self.split.train(point, label)
        self.num_samples += 1

        decision = self.split.split_check()
        if decision:
            self._commit_split(decision)

    def _commit_split(self, decision):
        children, split_info = self.split.create_children(decision.dimension, node_factory=self._spawn_child)

        self._majority_class = self.split.majority_class()
        self._majority_probability = self.split.majority_probability()
        self.split_dimension = decision.dimension
        self.split_info = split_info
        self.split_decision = decision
        self.children = children
        self.split = None

        if self.verbose:
            indent = "  " * (self.depth + 1)
            dim_name = self.dataset_info.feature_names[decision.dimension]
            print(f"{indent}Node {self.id} SPLIT on '{dim_name}' into {len(children)} children "
                  f"after {decision.num_samples} samples. Reason: {decision.reason}")

    def predict(self, point):
        """Majority class of the leaf the point is routed to."""
        point = check_point(point, self.dataset_info.dimensionality)
        if self.is_leaf:
            return self.split.majority_class()
        direction = self._route(point)
        if direction is None:
            return self._majority_class
        return self.children[direction].predict(point)

    def majority_class(self):
        if self.is_leaf:
            return self.split.majority_class()
        return self._majority_class

    def majority_probability(self):
        if self.is_leaf:
            return self.split.majority_probability()
        return self._majority_probability

    def split_check(self):
        if not self.is_leaf:
            raise ValueError("split_check is only available on leaf nodes.")
        return self.split.split_check()

    def num_children(self):
        return len(self.children)

    def num_nodes(self):
        return 1 + sum(child.num_nodes() for child in self.children)

    def num_leaves(self):
        if self.is_leaf:
            return 1
        return sum(child.num_leaves() for child in self.children)

    def depth_reached(self):
        if self.is_leaf:
            return self.depth
        return max(child.depth_reached() for child in self.children)

    def __repr__(self):
        if self.is_leaf:
            return (f"StreamingDecisionTree(id={self.id}, Leaf, depth={self.depth}, samples={self.num_samples}, "
                    f"majority={self.majority_class()})")
        return (f"StreamingDecisionTree(id={self.id}, Split, depth={self.depth}, "
                f"dimension={self.split_dimension}, children={len(self.children)})")


class HoeffdingTreeClassifier:
    """Feeds records (a Pandas DataFrame or a list of dicts) through a StreamingDecisionTree."""

    def __init__(
        self,
        confidence=0.95,
        tie_threshold=0.05,
        min_samples=0,
        check_interval=1,
        max_samples=None,
        max_depth=None,
        bins=10,
        observations_before_binning=100,
        fitness_function="gini",
        verbose=False
    ):
        self.confidence = confidence
        self.tie_threshold = tie_threshold
        self.min_samples = min_samples
        self.check_interval = check_interval
        self.max_samples = max_samples
        self.max_depth = max_depth
        self.bins = bins
        self.observations_before_binning = observations_before_binning
        self.fitness_function = fitness_function
        self.verbose = verbose

        self.root = None
        self.dataset_info = None
        self.target_column = ''
        self.feature_columns = []
        self.classes_ = []
        self._class_to_code = {}

    def get_params(self, deep=True):
        return {
            'confidence': self.confidence,
            'tie_threshold': self.tie_threshold,
            'min_samples': self.min_samples,
            'check_interval': self.check_interval,
            'max_samples': self.max_samples,
            'max_depth': self.max_depth,
            'bins': self.bins,
            'observations_before_binning': self.observations_before_binning,
            'fitness_function': self.fitness_function,
            'verbose': self.verbose
        }

    def fit(self, data, target_column, feature_columns, feature_types=None):
        """
        Builds the feature metadata and class encoding from data, creates a
        fresh root and streams every record through it in order.
        """
        records = to_records(data)
        if self.verbose:
            fit_start_time = time.time()
            print(f"HoeffdingTreeClassifier.fit started. Data has {len(records)} rows.")

        if not records:
            raise ValueError("Training data cannot be empty.")

        self.target_column, self.feature_columns = target_column, list(feature_columns)
        self.dataset_info = DatasetInfo.from_records(records, self.feature_columns, feature_types)

        labels = [row.get(target_column) for row in records]
        self.classes_ = sorted(set(labels), key=str)
        self._class_to_code = {label: code for code, label in enumerate(self.classes_)}

        self.root = StreamingDecisionTree(self.dataset_info, len(self.classes_), **self.get_params())
        self._train_records(records)

        if self.verbose:
            fit_end_time = time.time()
            print(f"HoeffdingTreeClassifier.fit completed in {fit_end_time - fit_start_time:.4f}s. "
                  f"Total nodes: {self.root.num_nodes()}")
        return self

    def partial_fit(self, data):
        """Streams more records into an already fitted tree. Unseen categories or labels raise ValueError."""
        if self.root is None:
            raise ValueError("Tree has not been fitted yet.")
        self._train_records(to_records(data))
        return self

    def _train_records(self, records):
        for row in records:
            label = row.get(self.target_column)
            if label not in self._class_to_code:
                raise ValueError(f"Unseen class label '{label}' in column '{self.target_column}'.")
            point = self.dataset_info.encode_record(row, self.feature_columns)
            self.root.train(point, self._class_to_code[label])

    def predict(self, data):
        if self.root is None:
            raise ValueError("Tree has not been fitted yet.")
        records = to_records(data)

        predictions = []
        for row in records:
            point = self.dataset_info.encode_record(row, self.feature_columns, allow_unseen=True)
            predictions.append(self.classes_[self.root.predict(point)])
        return np.array(predictions)

    def print_tree(self, node=None, indent=""):
        if node is None:
            node = self.root
        if node is None:
            return

        label = self.classes_[node.majority_class()]
        node_stats = f"N={node.num_samples} | majority={label} ({node.majority_probability():.3f})"

        if node.is_leaf:
            print(f"{indent}Leaf: {node_stats}")
            return

        feature = self.feature_columns[node.split_dimension]
        decision = node.split_decision
        print(f"{indent}Split: {feature} (gain={decision.best_gain:.4f}, eps={decision.epsilon:.4f}) | {node_stats}")
        for direction, child in enumerate(node.children):
            if self.dataset_info.is_categorical(node.split_dimension):
                condition = f"{feature} == {self.dataset_info.unmap_string(direction, node.split_dimension)}"
            else:
                condition = node.split_info.describe(feature, direction)
            self.print_tree(child, indent + f"  |--[{condition}]: ")

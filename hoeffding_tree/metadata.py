# hoeffding_tree/metadata.py
import math
import warnings
import numpy as np

CATEGORICAL = 'categorical'
NUMERICAL = 'numerical'
DIMENSION_TYPES = (CATEGORICAL, NUMERICAL)

NAN_PLACEHOLDER = '__NaN__'


class DatasetInfo:
    """
    Per-dimension feature metadata: whether each dimension is categorical or
    numerical, and for categorical dimensions the mapping between raw values
    and the dense integer codes [0, K) the split candidates consume.

    Dimensions are added on demand by map_string / set_dimension_type, so an
    empty DatasetInfo can be filled one mapping at a time.
    """

    def __init__(self, dimensionality=0, feature_names=None):
        if feature_names is not None:
            feature_names = list(feature_names)
            dimensionality = max(dimensionality, len(feature_names))
        else:
            feature_names = []
        self.feature_names = feature_names
        self.dimension_types = []
        self.value_to_code = []
        self.code_to_value = []
        self.numeric_fill_values = {}
        self._grow(dimensionality)

    def _grow(self, dimensionality):
        while len(self.dimension_types) < dimensionality:
            dim = len(self.dimension_types)
            self.dimension_types.append(NUMERICAL)
            self.value_to_code.append({})
            self.code_to_value.append({})
            if len(self.feature_names) <= dim:
                self.feature_names.append(f"dim_{dim}")

    @property
    def dimensionality(self):
        return len(self.dimension_types)

    def _check_dimension(self, dimension):
        if dimension < 0 or dimension >= self.dimensionality:
            raise ValueError(f"Dimension {dimension} out of range for {self.dimensionality} dimensions.")

    def set_dimension_type(self, dimension, dimension_type):
        if dimension_type not in DIMENSION_TYPES:
            raise ValueError(f"Unknown dimension type '{dimension_type}'. Expected one of {DIMENSION_TYPES}.")
        if dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {dimension}.")
        self._grow(dimension + 1)
        if dimension_type == NUMERICAL and self.value_to_code[dimension]:
            raise ValueError(f"Dimension {dimension} already has categorical mappings.")
        self.dimension_types[dimension] = dimension_type

    def dimension_type(self, dimension):
        self._check_dimension(dimension)
        return self.dimension_types[dimension]

    def is_categorical(self, dimension):
        return self.dimension_type(dimension) == CATEGORICAL

    def map_string(self, value, dimension):
        """
        Returns the code for value in the given dimension, assigning the next
        free code if the value has not been seen. The dimension becomes categorical.
        """
        if dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {dimension}.")
        self._grow(dimension + 1)
        self.dimension_types[dimension] = CATEGORICAL

        key = str(value) if value is not None else NAN_PLACEHOLDER
        mapping = self.value_to_code[dimension]
        if key not in mapping:
            code = len(mapping)
            mapping[key] = code
            self.code_to_value[dimension][code] = key
        return mapping[key]

    def unmap_string(self, code, dimension):
        self._check_dimension(dimension)
        try:
            return self.code_to_value[dimension][int(code)]
        except KeyError:
            raise ValueError(f"Code {code} has no mapping in dimension {dimension}.") from None

    def num_mappings(self, dimension):
        """Cardinality of a categorical dimension (0 for numerical dimensions)."""
        self._check_dimension(dimension)
        return len(self.value_to_code[dimension])

    def encode(self, value, dimension, allow_unseen=False):
        """
        Encodes one raw feature value for the given dimension.

        Categorical values are looked up (never assigned) in the existing mapping.
        Unseen categories raise ValueError, or with allow_unseen=True emit a
        UserWarning and encode as -1. Missing numerical values (None, NaN or
        non-numbers) take the dimension's fill value recorded by from_records,
        or NaN when no fill value exists.
        """
        if self.dimension_type(dimension) == NUMERICAL:
            if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
                if not math.isnan(value):
                    return float(value)
            return self.numeric_fill_values.get(dimension, math.nan)

        key = str(value) if value is not None else NAN_PLACEHOLDER
        code = self.value_to_code[dimension].get(key)
        if code is None:
            feat_name = self.feature_names[dimension]
            if not allow_unseen:
                raise ValueError(f"Unseen category '{key}' for feature '{feat_name}'.")
            warnings.warn(f"Unseen category '{key}' for feature '{feat_name}'. Mapping to unknown path.", UserWarning)
            return -1.0
        return float(code)

    def encode_record(self, record, feature_columns=None, allow_unseen=False):
        """Encodes a dict-like record into a float point of length dimensionality."""
        feature_columns = feature_columns or self.feature_names
        point = np.empty(len(feature_columns), dtype=float)
        for j, feat_name in enumerate(feature_columns):
            point[j] = self.encode(record.get(feat_name), j, allow_unseen=allow_unseen)
        return point

    @staticmethod
    def infer_feature_types(records, feature_columns):
        inferred_types = {}
        if not records:
            return {col: NUMERICAL for col in feature_columns}

        sample_row = records[0]
        for col in feature_columns:
            val = sample_row.get(col)
            if isinstance(val, (int, float, np.integer, np.floating)) and not isinstance(val, bool):
                inferred_types[col] = NUMERICAL
            else:  # str, bool, None, etc. are treated as categorical
                inferred_types[col] = CATEGORICAL
        return inferred_types

    @classmethod
    def from_records(cls, records, feature_columns, feature_types=None):
        """
        Builds the metadata for a list of dict records. Categorical codes are
        assigned in sorted order of the stringified values, with None mapped
        to a '__NaN__' category. Numerical dimensions record the median of their
        values as the fill value for missing entries (0.0 if none are present).
        """
        feature_columns = list(feature_columns)
        feature_types = feature_types or cls.infer_feature_types(records, feature_columns)

        info = cls(feature_names=feature_columns)
        for j, feat_name in enumerate(feature_columns):
            ftype = feature_types.get(feat_name, NUMERICAL)
            info.set_dimension_type(j, ftype)
            if ftype != CATEGORICAL:
                numeric_col = np.array([info.encode(row.get(feat_name), j) for row in records], dtype=float)
                nan_mask = np.isnan(numeric_col)
                info.numeric_fill_values[j] = float(np.nanmedian(numeric_col)) if np.any(~nan_mask) else 0.0
                continue
            str_values = {str(row.get(feat_name)) if row.get(feat_name) is not None else NAN_PLACEHOLDER
                          for row in records}
            for val in sorted(str_values):
                info.map_string(val, j)
        return info

    def __repr__(self):
        dims = ", ".join(
            f"{name}:{dtype}" + (f"[{len(codes)}]" if dtype == CATEGORICAL else "")
            for name, dtype, codes in zip(self.feature_names, self.dimension_types, self.value_to_code)
        )
        return f"DatasetInfo({dims})"

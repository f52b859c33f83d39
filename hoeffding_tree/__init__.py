# hoeffding_tree/__init__.py

"""
Hoeffding Tree Package

Incremental (streaming) decision trees that decide when to split a leaf with
the Hoeffding bound over per-dimension category x class counts.
"""

from .candidates import CategoricalSplit, CategoricalSplitInfo, NumericSplit, NumericSplitInfo
from .impurity import GiniImpurity, InformationGain
from .metadata import DatasetInfo
from .splitting import HoeffdingSplit, SplitDecision
from .stopping import hoeffding_bound
from .tree import HoeffdingTreeClassifier, StreamingDecisionTree

VERSION = "0.1.0"

__all__ = [
    "CategoricalSplit",
    "CategoricalSplitInfo",
    "DatasetInfo",
    "GiniImpurity",
    "HoeffdingSplit",
    "HoeffdingTreeClassifier",
    "InformationGain",
    "NumericSplit",
    "NumericSplitInfo",
    "SplitDecision",
    "StreamingDecisionTree",
    "hoeffding_bound",
]

# hoeffding_tree/stopping.py
import math
import numpy as np

# Gains at or below this are treated as zero; two gains closer than this are tied.
GAIN_TOLERANCE = 1e-10


def hoeffding_bound(value_range, confidence, num_samples):
    """
    Hoeffding bound epsilon = sqrt(R^2 * ln(1/delta) / (2n)), with delta = 1 - confidence.

    With probability at least `confidence`, the mean of num_samples i.i.d.
    observations of a variable with range R lies within epsilon of its true mean.

    Args:
        value_range (float): Range R of the estimated quantity.
        confidence (float): Success probability 1 - delta, in (0, 1).
        num_samples (int): Number of observations n.

    Returns:
        float: epsilon. Infinite when num_samples is 0.
    """
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}.")
    if num_samples <= 0:
        return math.inf
    delta = 1.0 - confidence
    return math.sqrt(value_range * value_range * math.log(1.0 / delta) / (2.0 * num_samples))


def rank_gains(gains):
    """
    Returns (best_dimension, best_gain, second_gain) for a sequence of per-dimension gains.
    Ties go to the lowest dimension. With a single dimension the runner-up gain is 0.
    """
    gains = np.asarray(gains, dtype=float)
    if gains.size == 0:
        return None, 0.0, 0.0
    best_dimension = int(np.argmax(gains))
    best_gain = float(gains[best_dimension])
    if gains.size == 1:
        return best_dimension, best_gain, 0.0
    others = np.delete(gains, best_dimension)
    return best_dimension, best_gain, float(others.max())


def check_pre_split_stopping_conditions(
    num_samples,
    class_counts,
    min_samples=0,
    check_interval=1,
    current_depth=0,
    max_depth=None
    ):
    """
    Checks for cheap stopping conditions before any fitness is evaluated.

    Args:
        num_samples (int): Examples seen at the node.
        class_counts (array-like): Per-class counts at the node.
        min_samples (int): Grace period; no split is considered before this many examples.
        check_interval (int): Splits are only considered every check_interval examples.
        current_depth (int): Depth of the node in the tree.
        max_depth (int or None): Maximum depth; None means unlimited.

    Returns:
        str or None: A string describing the reason for not splitting, or None.
    """
    if num_samples == 0:
        return "no_samples"

    if max_depth is not None and current_depth >= max_depth:
        return f"max_depth ({current_depth} >= {max_depth})"

    if num_samples < min_samples:
        return f"min_samples ({num_samples} < {min_samples})"

    if num_samples % check_interval != 0:
        return f"check_interval ({num_samples} % {check_interval} != 0)"

    # Purity check: a node that has only seen one class has nothing to gain.
    if np.count_nonzero(class_counts) <= 1:
        return "pure_node (single observed class)"

    return None


def check_post_split_stopping_condition(
    best_gain,
    second_gain,
    epsilon,
    tie_threshold,
    num_samples=0,
    max_samples=None,
    verbose=False,
    node_depth_for_logs=0
):
    """
    Applies the Hoeffding test to the two best gains of a node.

    A split on the best dimension is accepted when its margin over the runner-up
    exceeds epsilon, when epsilon has shrunk below tie_threshold (the two are
    close enough that the choice no longer matters), or when num_samples has
    reached max_samples. In every case the best gain must be positive.

    The tie rule lets noise-only streams keep splitting once epsilon drops below
    tie_threshold, since any small positive gain then qualifies. Pass
    tie_threshold=0 to split only on a clear margin or on max_samples.

    Returns:
        tuple: (should_split, reason).
    """
    indent = "  " * (node_depth_for_logs + 1)
    margin = best_gain - second_gain

    if verbose:
        print(f"{indent}  Hoeffding Check (n={num_samples}):")
        print(f"{indent}    - Best gain: {best_gain:.5f}, runner-up gain: {second_gain:.5f}, margin: {margin:.5f}")
        print(f"{indent}    - Epsilon: {epsilon:.5f} (tie threshold {tie_threshold})")

    if best_gain <= GAIN_TOLERANCE:
        reason = "no_positive_gain"
    elif margin > epsilon and margin > GAIN_TOLERANCE:
        return True, f"hoeffding_bound (margin {margin:.4f} > epsilon {epsilon:.4f})"
    elif epsilon < tie_threshold:
        return True, f"tie_threshold (epsilon {epsilon:.4f} < {tie_threshold})"
    elif max_samples is not None and num_samples >= max_samples:
        return True, f"max_samples ({num_samples} >= {max_samples})"
    else:
        reason = f"hoeffding_stop (margin {margin:.4f} <= epsilon {epsilon:.4f})"

    if verbose:
        print(f"{indent}    - Decision: no split. {reason}")
    return False, reason


if __name__ == '__main__':
    print("--- Hoeffding bound ---")
    for n in (10, 100, 1000, 10000):
        print(f"n={n}: epsilon={hoeffding_bound(0.5, 0.95, n):.5f}")

    print("\n--- Pre-split checks ---")
    print(check_pre_split_stopping_conditions(0, [0, 0]))  # no_samples
    print(check_pre_split_stopping_conditions(50, [50, 0]))  # pure_node
    print(check_pre_split_stopping_conditions(50, [25, 25], min_samples=100))  # min_samples
    print(check_pre_split_stopping_conditions(50, [25, 25]))  # None

    print("\n--- Post-split checks ---")
    print(check_post_split_stopping_condition(0.3, 0.01, hoeffding_bound(0.5, 0.95, 200), 0.05, 200, verbose=True))
    print(check_post_split_stopping_condition(0.0, 0.0, hoeffding_bound(0.5, 0.95, 5000), 0.05, 5000, verbose=True))

# tests/generated_datasets/dataset_generator_numerical.py
import numpy as np

# Standard column names for generated datasets
TARGET_COLUMN = 'label'


def generate_numerical_step_class_data(
    rng,
    num_samples=1000,
    feature_name='num_feat_step',
    min_val=0.0,
    max_val=1.0,
    thresholds=(0.5,),
    class_values=('low', 'high'),
    label_noise=0.0
):
    """
    Generates a stream where the label is a step function of one numerical feature:
    values below thresholds[0] get class_values[0], and so on.
    """
    if len(class_values) != len(thresholds) + 1:
        raise ValueError("class_values must have exactly one more entry than thresholds.")

    data = []
    for i in range(num_samples):
        num_val = float(rng.uniform(min_val, max_val))
        step = int(np.searchsorted(thresholds, num_val, side='right'))
        label = class_values[step]
        if label_noise > 0 and rng.random() < label_noise:
            label = class_values[rng.integers(len(class_values))]

        data.append({feature_name: num_val, TARGET_COLUMN: label, 'id': f'num_{i}'})
    return data

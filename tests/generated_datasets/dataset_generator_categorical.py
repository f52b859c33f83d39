# tests/generated_datasets/dataset_generator_categorical.py
import numpy as np

# Standard column names for generated datasets
TARGET_COLUMN = 'label'


def generate_categorical_class_data(
    rng,
    num_samples=1000,
    feature_name='feature_cat',
    categories_class_map=None,  # e.g., {'A': 'yes', 'B': 'no', 'C': 'yes'}
    noise_feature_name='noise_cat',
    noise_categories=('N1', 'N2', 'N3'),
    label_noise=0.0
):
    """
    Generates a stream where the label is determined by one categorical feature.
    A second categorical feature is independent of the label. With probability
    label_noise the label is replaced by a uniformly drawn class.
    """
    if categories_class_map is None:
        categories_class_map = {'CAT_X': 'yes', 'CAT_Y': 'no', 'CAT_Z': 'yes'}

    if not categories_class_map:
        raise ValueError("categories_class_map cannot be empty.")

    category_names = list(categories_class_map.keys())
    class_names = sorted(set(categories_class_map.values()))
    data = []

    for i in range(num_samples):
        chosen_category = category_names[rng.integers(len(category_names))]
        label = categories_class_map[chosen_category]
        if label_noise > 0 and rng.random() < label_noise:
            label = class_names[rng.integers(len(class_names))]

        row = {
            feature_name: chosen_category,
            noise_feature_name: noise_categories[rng.integers(len(noise_categories))],
            TARGET_COLUMN: label,
            'id': f'cat_{i}'
        }
        data.append(row)
    return data


def get_dataset(config=None, seed=0):
    """
    Generates a train and test stream based on the config.
    Config example:
    {
        "num_samples_train": 2000,
        "num_samples_test": 500,
        "feature_name": "region",
        "categories_class_map": {"North": "a", "South": "b"},
        "label_noise": 0.0
    }
    """
    if config is None:
        config = {  # Default config
            "num_samples_train": 2000,
            "num_samples_test": 500,
            "feature_name": "categorical_feature",
            "categories_class_map": {"GroupA": "yes", "GroupB": "no", "GroupC": "yes", "GroupD": "maybe"},
            "label_noise": 0.0
        }

    rng = np.random.default_rng(seed)
    data_train = generate_categorical_class_data(
        rng,
        num_samples=config["num_samples_train"],
        feature_name=config["feature_name"],
        categories_class_map=config["categories_class_map"],
        label_noise=config["label_noise"]
    )
    data_test = generate_categorical_class_data(
        rng,
        num_samples=config["num_samples_test"],
        feature_name=config["feature_name"],
        categories_class_map=config["categories_class_map"],
        label_noise=0.0
    )

    return data_train, data_test, config["feature_name"]

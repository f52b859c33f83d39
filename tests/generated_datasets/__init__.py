# tests/generated_datasets/__init__.py

"""
Generated Datasets Sub-Package for Hoeffding Tree Tests

Each generator takes an explicit numpy Generator so streams are reproducible.
"""

# tests/__init__.py

"""
Testing Package for the Hoeffding Tree
"""

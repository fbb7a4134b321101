"""
Operator entrypoints.
"""

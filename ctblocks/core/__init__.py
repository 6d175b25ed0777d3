"""
Core numeric kernel, validated parameter models, and math primitives.

This package has no knowledge of blocks; blocks depend on it.
"""

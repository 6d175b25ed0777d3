"""
Test suite for ctblocks

Contains:
- tests/unit/          : Unit tests for kernel types, parallel helpers and blocks
"""

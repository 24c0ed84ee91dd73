"""
Test suite for notary-topology

Contains:
- tests/unit/          : Unit tests for individual modules
"""

"""
Test suite for the multisig authorization engine

Contains:
- tests/unit/          : Unit tests for individual modules and engine scenarios
"""

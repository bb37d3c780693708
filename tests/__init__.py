"""
Test suite for the life calendar engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""

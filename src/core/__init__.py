"""
Core domain models, calendar primitives, payload contracts and logging setup.

This package holds the building blocks that know nothing about scheduling
or session state.
"""

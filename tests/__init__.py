"""
Test suite for precisecalc

Contains:
- tests/unit/          : Unit tests for individual modules, engine and CLI
"""

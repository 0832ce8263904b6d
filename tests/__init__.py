"""
Test suite for xrate-graph

Contains:
- tests/conftest.py    : Shared graph fixtures and sample price updates
- tests/unit/          : Unit tests for individual modules
"""

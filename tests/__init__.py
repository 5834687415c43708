"""
Omniwave Test Suite
===================

    python -m pytest tests/                     # Run all tests
    python -m pytest tests/unit                 # Tables, evaluator, sequencer
    python -m pytest tests/integration          # End-to-end runs and CLI

Shared dataset fixtures live in tests/conftest.py.
"""

"""Tests for contracts package.

This package contains unit tests for the shared contract types:
1. Centroid accumulation and merging (test_centroid.py)
2. RunState transitions driven by SlotUpdates (test_run_state.py)

These tests focus on the guarantees other layers rely on, not implementation
details.
"""

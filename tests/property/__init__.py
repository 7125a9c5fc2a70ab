# tests/property/__init__.py
"""Property-based tests for multikmeans.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Centroid merging and per-run
distortion must not depend on how the data is partitioned, so these are
checked over generated datasets rather than a handful of fixtures.

Test categories:
- test_centroid_properties: combine is commutative and associative
- test_coordinator_properties: partition invariance and run monotonicity
"""

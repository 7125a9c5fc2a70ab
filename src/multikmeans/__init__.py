"""
multikmeans: several K-means runs over one partitioned dataset, best one wins.

Every iteration makes a single pass over the data that serves all runs that
have not yet converged.
"""

__version__ = "0.1.0"

"""Iterative refinement reputation for bipartite rating graphs."""

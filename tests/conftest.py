"""
Pytest configuration for quadsect tests.
Selects a non-interactive matplotlib backend before any test imports pyplot.
"""
import matplotlib

matplotlib.use("Agg")

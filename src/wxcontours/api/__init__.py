"""HTTP host for the contour pipeline."""

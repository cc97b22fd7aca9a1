"""Service layer - contour pipeline and settings."""

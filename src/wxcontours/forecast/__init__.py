"""Point-forecast source: model registry and grid sampling."""

"""Input resolution: request normalization and dependency lookup."""

"""Adapters to git, manifests on disk, and target commands."""

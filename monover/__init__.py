"""monover: semantic versioning and release for monorepo projects."""

__version__ = "0.1.0"

"""Presentation of release outcomes."""

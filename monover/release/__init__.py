"""Release bounded context.

Layers:
- domain: version rules, models and collaborator interfaces
- resolve: request normalization and dependency lookup
- infra: git, filesystem and process adapters
- flow: bump computation, writers, push, post-targets and the orchestrator
- view: console rendering of outcomes
"""

from __future__ import annotations

"""Error payload shared by every layer of the release context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_request",
    "dependency_resolution",
    "history_read",
    "write_failed",
    "push_failed",
    "post_target_config",
    "post_target_failed",
    "unexpected",
]

# Kinds the user can fix from the message alone; everything else is
# rendered with its origin and full diagnostic detail.
_STRUCTURED_KINDS: frozenset[ReleaseErrorKind] = frozenset({"invalid_request", "post_target_config"})


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    Attributes:
        kind: Stable error category.
        message: One-line summary.
        hint: Optional actionable suggestion.
        origin: Pipeline state the error surfaced in (set by the flow).
        detail: Captured stderr or traceback.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    origin: str | None = None
    detail: str | None = None

    @property
    def structured(self) -> bool:
        return self.kind in _STRUCTURED_KINDS

    def with_origin(self, origin: str) -> ReleaseError:
        if self.origin is not None:
            return self
        return replace(self, origin=origin)

"""Semantic version parsing, precedence and increments.

Increments follow node-semver so that versions produced here match what
JavaScript tooling in the same monorepo would compute.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Literal, get_args

ReleaseType = Literal["major", "minor", "patch", "premajor", "preminor", "prepatch", "prerelease"]
RELEASE_TYPES: tuple[str, ...] = get_args(ReleaseType)

Identifier = int | str

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
_PREID_RE = re.compile(r"^[0-9A-Za-z-]+$")


def _identifier(part: str) -> Identifier:
    return int(part) if part.isdigit() else part


def _identifier_key(ident: Identifier) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones.
    if isinstance(ident, int):
        return (0, ident, "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def preid(self) -> str | None:
        """Leading alphanumeric prerelease identifier, e.g. "beta"."""
        if self.prerelease and isinstance(self.prerelease[0], str):
            return self.prerelease[0]
        return None

    def _precedence(self) -> tuple[object, ...]:
        pre = tuple(_identifier_key(i) for i in self.prerelease)
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(str(i) for i in self.prerelease)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    def bump(self, kind: ReleaseType, preid: str | None = None) -> SemVer:
        """Return the next version for a release type."""
        match kind:
            case "major":
                if self.minor != 0 or self.patch != 0 or not self.prerelease:
                    return SemVer(self.major + 1, 0, 0)
                return SemVer(self.major, 0, 0)
            case "minor":
                if self.patch != 0 or not self.prerelease:
                    return SemVer(self.major, self.minor + 1, 0)
                return SemVer(self.major, self.minor, 0)
            case "patch":
                if not self.prerelease:
                    return SemVer(self.major, self.minor, self.patch + 1)
                return SemVer(self.major, self.minor, self.patch)
            case "premajor":
                return SemVer(self.major + 1, 0, 0)._pre(preid)
            case "preminor":
                return SemVer(self.major, self.minor + 1, 0)._pre(preid)
            case "prepatch":
                return SemVer(self.major, self.minor, self.patch + 1)._pre(preid)
            case "prerelease":
                base = self if self.prerelease else SemVer(self.major, self.minor, self.patch + 1)
                return base._pre(preid)
            case _:
                raise AssertionError(f"unexpected release type: {kind}")

    def _pre(self, preid: str | None) -> SemVer:
        parts: list[Identifier] = list(self.prerelease)
        if not parts:
            parts = [0]
        else:
            for idx in range(len(parts) - 1, -1, -1):
                value = parts[idx]
                if isinstance(value, int):
                    parts[idx] = value + 1
                    break
            else:
                parts.append(0)

        if preid:
            if self.prerelease[:1] != (preid,) or len(parts) < 2 or not isinstance(parts[1], int):
                parts = [preid, 0]
        return SemVer(self.major, self.minor, self.patch, tuple(parts))


ZERO = SemVer(0, 0, 0)


def parse_version(text: str) -> SemVer | None:
    """Parse a strict semantic version string (no "v" prefix)."""
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    pre = tuple(_identifier(p) for p in m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre, build)


def parse_tag(tag: str, *, prefix: str) -> SemVer | None:
    """Parse `<prefix><semver>`; None for tags of another prefix or shape."""
    if not tag.startswith(prefix):
        return None
    return parse_version(tag[len(prefix) :])


def is_release_type(value: str) -> bool:
    return value in RELEASE_TYPES


def is_valid_preid(value: str) -> bool:
    return bool(_PREID_RE.match(value))

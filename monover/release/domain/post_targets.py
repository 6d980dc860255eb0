"""Post-release target descriptors and option templating.

A post-target names another runnable target as `project:target` (with an
optional `:configuration`) and a mapping of options whose string values
may reference release values as `${name}`:

    target = "core:publish"
    options = { tag = "${tag}", dry = "${dry_run}" }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from string import Template

from monover.core.result import Err, Ok, Result
from monover.release.errors import ReleaseError

CONTEXT_KEYS: tuple[str, ...] = (
    "project",
    "version",
    "tag",
    "tag_prefix",
    "no_verify",
    "dry_run",
    "remote",
    "base_branch",
)


@dataclass(frozen=True, slots=True)
class PostTarget:
    target: str
    options: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TargetRef:
    project: str
    target: str
    configuration: str | None = None

    def __str__(self) -> str:
        if self.configuration:
            return f"{self.project}:{self.target}:{self.configuration}"
        return f"{self.project}:{self.target}"


@dataclass(frozen=True, slots=True)
class ResolvedPostTarget:
    ref: TargetRef
    options: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class PostTargetContext:
    project: str
    version: str
    tag: str
    tag_prefix: str
    no_verify: bool
    dry_run: bool
    remote: str
    base_branch: str

    def as_mapping(self) -> dict[str, str]:
        return {key: _scalar(getattr(self, key)) for key in CONTEXT_KEYS}


def _scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _config_error(message: str, *, hint: str | None = None) -> ReleaseError:
    return ReleaseError(kind="post_target_config", message=message, hint=hint)


def parse_target_ref(text: str) -> Result[TargetRef, ReleaseError]:
    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(p.strip() for p in parts):
        return Err(
            _config_error(
                f"invalid target reference '{text}'",
                hint="Expected project:target or project:target:configuration",
            )
        )
    configuration = parts[2].strip() if len(parts) == 3 else None
    return Ok(TargetRef(project=parts[0].strip(), target=parts[1].strip(), configuration=configuration))


def resolve_post_target(
    task: PostTarget, context: PostTargetContext
) -> Result[ResolvedPostTarget, ReleaseError]:
    """Validate a descriptor and substitute release values into its options."""
    ref = parse_target_ref(task.target)
    if isinstance(ref, Err):
        return ref

    values = context.as_mapping()
    options: dict[str, str] = {}
    for name, raw in task.options.items():
        if isinstance(raw, bool | int | float):
            options[name] = _scalar(raw)
            continue
        if not isinstance(raw, str):
            return Err(
                _config_error(
                    f"option '{name}' of {task.target} must be a string, number or boolean"
                )
            )
        try:
            options[name] = Template(raw).substitute(values)
        except KeyError as e:
            return Err(
                _config_error(
                    f"unknown placeholder ${{{e.args[0]}}} in option '{name}' of {task.target}",
                    hint=f"Available: {', '.join(CONTEXT_KEYS)}",
                )
            )
        except ValueError:
            return Err(
                _config_error(
                    f"malformed placeholder in option '{name}' of {task.target}",
                    hint="Write placeholders as ${name}; use $$ for a literal $",
                )
            )
    return Ok(ResolvedPostTarget(ref=ref.value, options=options))

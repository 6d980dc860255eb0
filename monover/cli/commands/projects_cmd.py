from __future__ import annotations

from monover.cli.context import build_context
from monover.output.console import Style


def projects() -> None:
    """List workspace projects with their roots and dependencies."""
    ctx = build_context()
    config = ctx.config
    if not config.projects:
        ctx.console.warning(f"no projects declared in {ctx.workspace.config_path}")
        return

    for name in sorted(config.projects):
        project = config.projects[name]
        try:
            root = project.root.relative_to(config.root)
        except ValueError:
            root = project.root
        ctx.console.print(f"{name}  {root}")
        if project.dependencies:
            ctx.console.print(f"  depends on: {', '.join(project.dependencies)}", Style.DIM)
        if project.post_targets:
            targets = ", ".join(p.target for p in project.post_targets)
            ctx.console.print(f"  post-targets: {targets}", Style.DIM)

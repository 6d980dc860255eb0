from __future__ import annotations

from monover.output.console import ConsoleProtocol, Style
from monover.release.contracts import ReleaseOutcome
from monover.release.errors import ReleaseError


def render_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Structured errors get a focused line; others get origin and full detail."""
    if error.structured:
        label = "Post-targets error: " if error.kind == "post_target_config" else ""
        console.error(f"{label}{error.message}")
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        return

    console.error(error.message)
    if error.origin:
        console.print(f"origin: {error.origin} ({error.kind})", Style.DIM)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    if error.detail:
        console.detail(error.detail)


def render_outcome(outcome: ReleaseOutcome, console: ConsoleProtocol) -> None:
    match outcome.state:
        case "nothing_to_release":
            console.info("Nothing changed since last release.")
        case "done":
            report = outcome.report
            tag = report.tag if report is not None else "?"
            if outcome.dry_run:
                console.success(f"[dry-run] would release {tag} (no files, commits or tags written)")
            else:
                console.success(f"released {tag}")
        case "failed":
            if outcome.error is not None:
                render_error(outcome.error, console)
            else:
                console.error("release failed")

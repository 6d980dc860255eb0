from __future__ import annotations

from ._utils import iter_source_files, matches_prefix, package_root, parse_imports


def test_subprocess_is_only_imported_by_process_module() -> None:
    root = package_root()
    offenders: list[str] = []
    for file_path in iter_source_files():
        rel = file_path.relative_to(root)
        if str(rel) == "platform/process.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "subprocess"):
                offenders.append(f"{rel}:{item.line}: subprocess import outside platform/process.py")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)

"""Pure ``.gitignore`` merging for generated projects."""

from __future__ import annotations

DEFAULT_GITIGNORE: tuple[str, ...] = (
    "modules/",
    "jumake_build/",
    "build/",
    "compile_commands.json",
    ".jumake",
    ".cache/",
)


def merge_gitignore(existing: str, entries: tuple[str, ...] = DEFAULT_GITIGNORE) -> str:
    """Return *existing* with every missing entry of *entries* appended.

    Entries already present as whole lines are left alone, and the
    original content is preserved verbatim.
    """
    present = {line.strip() for line in existing.splitlines()}
    missing = [entry for entry in entries if entry not in present]
    if not missing:
        return existing
    prefix = existing if not existing or existing.endswith("\n") else existing + "\n"
    return prefix + "".join(f"{entry}\n" for entry in missing)

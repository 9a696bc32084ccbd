"""
Keep the snapshot store out of version control.
"""

from enum import Enum
from pathlib import Path
from typing import Union


class GitignoreStatus(Enum):
    CREATED = "created"
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


def _entry_forms(entry: str) -> set:
    bare = entry.strip("/")
    return {bare, f"{bare}/", f"/{bare}", f"/{bare}/"}


def is_ignored(content: str, entry: str) -> bool:
    """
    Check whether `entry` already has its own line in .gitignore content.

    Matches whole lines only, so ".superenv-old" does not count as ".superenv".
    Anchored and directory forms ("/.superenv", ".superenv/") are accepted.
    """
    forms = _entry_forms(entry)
    return any(line.strip() in forms for line in content.splitlines())


def ensure_ignored(gitignore_path: Union[str, Path], entry: str) -> GitignoreStatus:
    """
    Make sure `entry` is listed in .gitignore exactly once.

    Args:
        gitignore_path: Path to the .gitignore file
        entry: Line to add (e.g. ".superenv")

    Returns:
        GitignoreStatus describing what was done
    """
    gitignore = Path(gitignore_path)

    if not gitignore.exists():
        gitignore.write_text(f"{entry}\n")
        return GitignoreStatus.CREATED

    content = gitignore.read_text()
    if is_ignored(content, entry):
        return GitignoreStatus.ALREADY_PRESENT

    with open(gitignore, 'a') as f:
        if content and not content.endswith('\n'):
            f.write('\n')
        f.write(f"{entry}\n")

    return GitignoreStatus.ADDED

"""
Activity history for superenv.

Every snapshot operation run through the CLI is appended to
.superenv/activity.json together with the git user who ran it.
"""

import json
import subprocess
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union


HISTORY_FILE = "activity.json"


@dataclass
class ActivityEntry:
    """A single recorded snapshot operation."""
    timestamp: str
    action: str  # "create", "push", "delete"
    snapshot: str
    outcome: str  # status value, e.g. "overwritten"
    user: str


class HistoryStore:
    """
    Reads and appends the activity log of a store.

    The log lives inside the store directory. Recording into a store that
    does not exist is skipped, so history never initializes a store.
    """

    def __init__(self, store_root: Union[str, Path]):
        self.store_root = Path(store_root)
        self.history_file = self.store_root / HISTORY_FILE
        self.activity_log: List[ActivityEntry] = self._load()

    def _load(self) -> List[ActivityEntry]:
        """Read activity.json; an unreadable or malformed log counts as empty."""
        try:
            raw = self.history_file.read_text(encoding="utf-8")
            return [ActivityEntry(**item) for item in json.loads(raw)]
        except FileNotFoundError:
            return []
        except (ValueError, TypeError):
            # ValueError covers both bad JSON and bytes that are not UTF-8
            return []

    def _save(self):
        payload = json.dumps([asdict(entry) for entry in self.activity_log], indent=2)
        self.history_file.write_text(payload + "\n", encoding="utf-8")

    def get_git_user(self) -> str:
        """Name from `git config user.name` in the project, or "unknown"."""
        command = ['git', 'config', 'user.name']
        try:
            result = subprocess.run(
                command,
                cwd=self.store_root.parent,
                capture_output=True,
                text=True,
                timeout=2,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, NotADirectoryError):
            return "unknown"

        name = result.stdout.strip() if result.returncode == 0 else ""
        return name or "unknown"

    def record(
        self,
        action: str,
        snapshot: str,
        outcome: str,
        user: Optional[str] = None
    ) -> Optional[ActivityEntry]:
        """
        Append an entry to the log.

        Args:
            action: Operation name ("create", "push", "delete")
            snapshot: Snapshot name
            outcome: Result of the operation
            user: User name (defaults to git user)

        Returns:
            The recorded entry, or None if the store does not exist
        """
        if not self.store_root.is_dir():
            return None

        if user is None:
            user = self.get_git_user()

        entry = ActivityEntry(
            timestamp=datetime.now().isoformat(timespec='seconds'),
            action=action,
            snapshot=snapshot,
            outcome=outcome,
            user=user
        )

        self.activity_log.append(entry)
        self._save()
        return entry

    def entries(self, snapshot: Optional[str] = None) -> List[ActivityEntry]:
        """
        Get recorded entries, oldest first.

        Args:
            snapshot: Only return entries for this snapshot

        Returns:
            List of ActivityEntry
        """
        if snapshot is None:
            return list(self.activity_log)
        return [entry for entry in self.activity_log if entry.snapshot == snapshot]

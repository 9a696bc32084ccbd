"""
Snapshot store for named environment files.

A store is a hidden directory holding one file per snapshot:

    .superenv/
        .staging.env
        .production.env

Snapshots are opaque text blobs. They are created with a placeholder body,
filled by a push from the working .env file, and only ever overwritten by a
push the caller explicitly confirms.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Union


SNAPSHOT_PREFIX = "."
SNAPSHOT_SUFFIX = ".env"
PLACEHOLDER_BODY = "# Environment variables for this snapshot\n"

PathLike = Union[str, Path]


class StoreError(Exception):
    """Base class for conditions that stop a store operation."""


class StoreNotInitialized(StoreError):
    def __init__(self, root: PathLike):
        self.root = Path(root)
        super().__init__(f"Store not initialized at {self.root}")


class WorkingFileMissing(StoreError):
    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f"Working file not found: {self.path}")


class InvalidSnapshotName(StoreError, ValueError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid snapshot name {name!r}: {reason}")


class SnapshotNotFound(StoreError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Snapshot '{name}' does not exist")


class InitStatus(Enum):
    CREATED = "created"
    ALREADY_INITIALIZED = "already_initialized"


class CreateStatus(Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class PushStatus(Enum):
    CREATED = "created"
    UNCHANGED = "unchanged"
    OVERWRITTEN = "overwritten"
    ABORTED = "aborted"


class DeleteStatus(Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"


def _separators() -> set:
    seps = {"/", "\\", os.sep}
    if os.altsep:
        seps.add(os.altsep)
    return seps


def validate_name(name: str, creating: bool = False) -> str:
    """
    Check that a snapshot name maps to exactly one file inside the store.

    Args:
        name: Snapshot name
        creating: If True, also reject dots so the name lists back unchanged

    Returns:
        The name, unchanged

    Raises:
        InvalidSnapshotName: If the name is unusable
    """
    if not name or not name.strip():
        raise InvalidSnapshotName(name, "name must not be empty")

    if any(sep in name for sep in _separators()):
        raise InvalidSnapshotName(name, "name must not contain path separators")

    if name in (".", ".."):
        raise InvalidSnapshotName(name, "name must not be a relative path")

    if creating and "." in name:
        raise InvalidSnapshotName(name, "name must not contain dots")

    return name


def snapshot_filename(name: str) -> str:
    """Filename used to store snapshot `name` (e.g. "staging" -> ".staging.env")."""
    return f"{SNAPSHOT_PREFIX}{name}{SNAPSHOT_SUFFIX}"


def parse_snapshot_filename(filename: str):
    """
    Extract the snapshot name from a store filename.

    Only the fixed leading dot and trailing ".env" are stripped, so a legacy
    file ".a.b.env" yields "a.b".

    Returns:
        Snapshot name, or None if the filename is not a usable snapshot
    """
    if not filename.startswith(SNAPSHOT_PREFIX) or not filename.endswith(SNAPSHOT_SUFFIX):
        return None

    name = filename[len(SNAPSHOT_PREFIX):-len(SNAPSHOT_SUFFIX)]
    try:
        return validate_name(name)
    except InvalidSnapshotName:
        return None


class SnapshotStore:
    """
    Directory of named environment snapshots.

    The store root is always passed in explicitly; nothing here looks at the
    process working directory.
    """

    def __init__(self, root: PathLike):
        self.root = Path(root)

    def is_initialized(self) -> bool:
        return self.root.is_dir()

    def initialize(self) -> InitStatus:
        """
        Create the store directory if needed.

        Returns:
            InitStatus.CREATED, or InitStatus.ALREADY_INITIALIZED if it existed

        Raises:
            StoreError: If the path exists but is not a directory
        """
        if self.root.is_dir():
            return InitStatus.ALREADY_INITIALIZED

        if self.root.exists():
            raise StoreError(f"{self.root} exists and is not a directory")

        self.root.mkdir(parents=True)
        return InitStatus.CREATED

    def path_for(self, name: str) -> Path:
        """Path of the file backing snapshot `name`."""
        return self.root / snapshot_filename(validate_name(name))

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def create(self, name: str) -> CreateStatus:
        """
        Create snapshot `name` with the placeholder body.

        An existing snapshot is never touched.

        Raises:
            StoreNotInitialized: If the store directory is missing
            InvalidSnapshotName: If the name cannot be created
        """
        validate_name(name, creating=True)
        self._require_initialized()

        path = self._snapshot_file(name)
        if path.is_file():
            return CreateStatus.ALREADY_EXISTS

        path.write_text(PLACEHOLDER_BODY)
        return CreateStatus.CREATED

    def list(self) -> Iterator[str]:
        """
        List snapshot names in directory order.

        The store is checked immediately; the scan itself is lazy and each
        call starts a fresh one.

        Raises:
            StoreNotInitialized: If the store directory is missing
        """
        self._require_initialized()
        return self._scan()

    def _scan(self) -> Iterator[str]:
        with os.scandir(self.root) as entries:
            for entry in entries:
                if not entry.is_file():
                    continue
                name = parse_snapshot_filename(entry.name)
                if name is not None:
                    yield name

    def read(self, name: str) -> str:
        """
        Read the content of snapshot `name`.

        Raises:
            StoreNotInitialized: If the store directory is missing
            SnapshotNotFound: If there is no such snapshot
        """
        self._require_initialized()

        path = self.path_for(name)
        if not path.is_file():
            raise SnapshotNotFound(name)

        return path.read_text()

    def push(
        self,
        name: str,
        env_path: PathLike,
        confirm: Callable[[str], bool],
    ) -> PushStatus:
        """
        Copy the working file into snapshot `name`.

        - No snapshot yet: written unconditionally.
        - Same bytes: nothing is written.
        - Different bytes: `confirm(name)` decides whether the snapshot is
          replaced in full.

        Args:
            name: Snapshot name
            env_path: Path to the working .env file
            confirm: Called only when contents differ; True means overwrite

        Returns:
            PushStatus describing what happened

        Raises:
            WorkingFileMissing: If env_path does not exist
            StoreNotInitialized: If the store directory is missing
            InvalidSnapshotName: If the name is unusable
        """
        validate_name(name)

        env_path = Path(env_path)
        if not env_path.is_file():
            raise WorkingFileMissing(env_path)

        self._require_initialized()

        content = env_path.read_bytes()
        path = self._snapshot_file(name)

        if not path.is_file():
            validate_name(name, creating=True)
            path.write_bytes(content)
            return PushStatus.CREATED

        if path.read_bytes() == content:
            return PushStatus.UNCHANGED

        if not confirm(name):
            return PushStatus.ABORTED

        path.write_bytes(content)
        return PushStatus.OVERWRITTEN

    def delete(self, name: str) -> DeleteStatus:
        """
        Remove snapshot `name`.

        Raises:
            StoreNotInitialized: If the store directory is missing
        """
        self._require_initialized()

        path = self.path_for(name)
        if not path.is_file():
            return DeleteStatus.NOT_FOUND

        path.unlink()
        return DeleteStatus.DELETED

    def _snapshot_file(self, name: str) -> Path:
        path = self.path_for(name)
        if path.exists() and not path.is_file():
            raise StoreError(f"{path} exists and is not a file")
        return path

    def _require_initialized(self):
        if not self.root.is_dir():
            raise StoreNotInitialized(self.root)

"""
superenv core modules.

Includes:
- store: Snapshot store with confirmed push
- gitignore: Keeps the store out of version control
- config: Project settings and environment overrides
- history: Activity log of snapshot operations
"""

from . import store
from . import gitignore
from . import config
from . import history

__all__ = [
    "store",
    "gitignore",
    "config",
    "history",
]

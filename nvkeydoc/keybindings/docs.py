"""
Documentation resolver.

Every plugin (root) may ship a JSON definition file describing its setup
table. A binding mined from ``require("telescope").setup{...}`` has a command
like ``defaults.mappings.i.actions_move_selection_next``; that path is looked
up in ``telescope.json`` and, if it points at a node of the form::

    {"description": "Move to the next result", "examples": ["<C-n>"]}

the node becomes the binding's documentation.

Definition files are read lazily, at most once per root. A file that cannot
be read or parsed marks its root unresolvable for the rest of the run; it
never aborts the run.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsonpath_ng.jsonpath import Child, Fields, JSONPath, Root

from .models import Keybinding, KeybindingDoc

logger = logging.getLogger(__name__)

WILDCARD = "*"  # jsonpath_ng Fields treat this name as "all keys"


class DocState(Enum):
    """Load state of a definition file."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    UNRESOLVABLE = "unresolvable"


@dataclass
class DocCacheEntry:
    """Cache slot for one root's definition file."""

    path: Path
    state: DocState = DocState.UNLOADED
    document: Any = None
    error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.state == DocState.LOADED


def discover_definitions(directory: Path) -> Dict[str, Path]:
    """
    Map every regular file in a directory to its stem.

    Returns:
        ``{"telescope": Path(".../telescope.json"), ...}``; empty if the
        directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Definition directory {directory} does not exist")
        return {}

    definitions: Dict[str, Path] = {}
    for path in sorted(directory.iterdir()):
        if path.is_file():
            definitions[path.stem] = path
    return definitions


def build_query(segments: List[str]) -> JSONPath:
    """Compile a key path into the JSONPath ``$.seg1.seg2...``."""
    query: JSONPath = Root()
    for segment in segments:
        query = Child(query, Fields(segment))
    return query


class DocResolver:
    """
    Attach documentation to keybindings from per-root definition files.

    Usage:
        resolver = DocResolver(discover_definitions(definitions_dir))
        resolver.resolve(keybindings)
    """

    def __init__(self, definitions: Mapping[str, Path]) -> None:
        self.cache: Dict[str, DocCacheEntry] = {
            root: DocCacheEntry(path=Path(path)) for root, path in definitions.items()
        }
        self.load_count = 0

    def entry(self, root: str) -> Optional[DocCacheEntry]:
        """Return the cache entry of a root, loading its file on first access."""
        entry = self.cache.get(root)
        if entry is None:
            return None
        if entry.state == DocState.UNLOADED:
            self._load(root, entry)
        return entry

    def _load(self, root: str, entry: DocCacheEntry) -> None:
        self.load_count += 1
        try:
            text = entry.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            entry.state = DocState.UNRESOLVABLE
            entry.error = f"cannot read {entry.path}: {e}"
            logger.warning(f"Definitions for {root} unavailable, {entry.error}")
            return

        try:
            entry.document = json.loads(text)
        except json.JSONDecodeError as e:
            entry.state = DocState.UNRESOLVABLE
            entry.error = f"invalid JSON in {entry.path}: {e}"
            logger.warning(f"Definitions for {root} unavailable, {entry.error}")
            return

        entry.state = DocState.LOADED
        logger.debug(f"Loaded definitions for {root} from {entry.path}")

    def lookup(self, keybinding: Keybinding) -> Optional[KeybindingDoc]:
        """
        Find the documentation for a single keybinding.

        Only bindings with a root carry a key path in their command; plain
        vimscript maps are never looked up.
        """
        if not keybinding.is_structured:
            return None

        entry = self.entry(keybinding.root)
        if entry is None or not entry.is_loaded:
            return None

        segments = keybinding.path_segments()
        if WILDCARD in segments:
            logger.debug(f"Not looking up wildcard path {keybinding.root}:{keybinding.command}")
            return None

        matches = build_query(segments).find(entry.document)
        if len(matches) != 1:
            logger.debug(
                f"No definition for {keybinding.root}:{keybinding.command} "
                f"({len(matches)} matches)"
            )
            return None

        doc = KeybindingDoc.from_json(matches[0].value)
        if doc is None:
            logger.debug(
                f"Definition for {keybinding.root}:{keybinding.command} "
                f"is not a description object"
            )
        return doc

    def resolve(self, keybindings: List[Keybinding]) -> List[Keybinding]:
        """Attach docs in place to every binding that has none yet."""
        for keybinding in keybindings:
            if keybinding.doc is not None:
                continue
            keybinding.doc = self.lookup(keybinding)
        return keybindings

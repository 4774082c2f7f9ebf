"""
Keybinding data model.

A Keybinding pairs a key sequence with the command it triggers. Bindings
found directly in vimscript have an empty root; bindings mined from a lua
``require("plugin").setup{...}`` call carry the plugin name as root and a
dotted path into the setup table as command.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class KeybindingDoc:
    """Human-readable documentation attached to a keybinding."""

    description: str
    examples: Optional[List[str]] = None

    @classmethod
    def from_json(cls, value: Any) -> Optional["KeybindingDoc"]:
        """
        Build a doc from a JSON node.

        Returns None when the node is not ``{"description": str,
        "examples": [str, ...]?}``.
        """
        if not isinstance(value, dict):
            return None

        description = value.get("description")
        if not isinstance(description, str):
            return None

        examples = value.get("examples")
        if examples is not None:
            if not isinstance(examples, list) or not all(isinstance(e, str) for e in examples):
                return None

        return cls(description=description, examples=examples)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data: dict = {"description": self.description}
        if self.examples is not None:
            data["examples"] = list(self.examples)
        return data


@dataclass
class Keybinding:
    """A single extracted keybinding."""

    root: str  # plugin name, "" for plain vimscript maps
    keymap: str  # e.g. "gj", "<C-n>"
    command: str  # e.g. ":Next<CR>", "mappings.i.move_selection_next"
    doc: Optional[KeybindingDoc] = field(default=None, compare=False)

    @property
    def is_structured(self) -> bool:
        """Whether the command is a dotted path into the root's definition file."""
        return bool(self.root)

    def path_segments(self) -> List[str]:
        """Split a structured command into its key path."""
        return self.command.split(".")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "root": self.root,
            "keymap": self.keymap,
            "command": self.command,
            "doc": self.doc.to_dict() if self.doc else None,
        }

"""
Flatten lua table constructors into keybindings.

Given the tree-sitter node of a table such as::

    {
      defaults = {
        mappings = {
          i = { ["<C-n>"] = "actions.move_selection_next" },
        },
      },
    }

the walker yields one Keybinding per string-to-string record, with the keys
of the enclosing tables prepended to the command as a dotted path::

    Keybinding(root, "<C-n>", "defaults.mappings.i.actions_move_selection_next")
"""

import logging
import re
from typing import List, Optional

from tree_sitter import Node

from .models import Keybinding

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "\n": "\n",
}

_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|\d{1,3}|.)", re.DOTALL)


def _decode_escape(match: re.Match) -> str:
    seq = match.group(1)
    if seq[0] == "x" and len(seq) == 3:
        return chr(int(seq[1:], 16))
    if seq.isdigit():
        return chr(int(seq))
    return _SIMPLE_ESCAPES.get(seq, seq)


def unescape_lua_string(raw: str) -> str:
    """Decode backslash escapes of a short lua string literal."""
    return _ESCAPE_RE.sub(_decode_escape, raw)


def string_value(node: Node) -> str:
    """Return the content of a lua ``string`` node without its quotes."""
    start = node.child_by_field_name("start")
    content = node.child_by_field_name("content")
    if content is None:
        if start is not None:
            # "" or ''
            return ""
        return node.text.decode("utf-8")[1:-1]
    text = content.text.decode("utf-8")

    if start is not None and start.type in ('"', "'"):
        return unescape_lua_string(text)
    # [[long strings]] are taken verbatim
    return text


def field_key(name: Node) -> Optional[str]:
    """Return the key of a record field, or None if it is not a literal."""
    if name.type == "identifier":
        return name.text.decode("utf-8")
    if name.type == "string":
        return string_value(name)
    return None


def walk_table(table: Node, root: str) -> List[Keybinding]:
    """
    Walk a ``table_constructor`` node depth first, in declaration order.

    Args:
        table: tree-sitter node of type ``table_constructor``
        root: plugin name every produced binding is tagged with

    Returns:
        Keybindings for every record whose key and value are both strings
    """
    bindings: List[Keybinding] = []

    for entry in table.named_children:
        if entry.type != "field":
            continue

        name = entry.child_by_field_name("name")
        value = entry.child_by_field_name("value")
        if name is None or value is None:
            # positional entry
            continue

        key = field_key(name)
        if key is None:
            logger.debug(f"Skipping computed key {name.text!r} in {root}")
            continue

        if value.type == "string":
            command = string_value(value)
            if key and command:
                bindings.append(
                    Keybinding(root=root, keymap=key, command=command.replace(".", "_"))
                )
        elif value.type == "table_constructor":
            for child in walk_table(value, root):
                child.command = f"{key}.{child.command}"
                bindings.append(child)

    return bindings

"""
Lua block extractor - finds keybinding tables in embedded lua code.

Recognizes the common plugin configuration idiom::

    require("telescope").setup({ defaults = { mappings = { ... } } })

i.e. a call on a property of another call whose callee is a plain name and
whose only argument is a string. The string names the plugin (the root), the
table passed to the outer call is handed to the table walker.
"""

import logging
from typing import List, Optional, Tuple

import tree_sitter
import tree_sitter_lua
from tree_sitter import Node

from .models import Keybinding
from .walker import string_value, walk_table

logger = logging.getLogger(__name__)

LUA_LANGUAGE = tree_sitter.Language(tree_sitter_lua.language())

# plugin.setup(...) and plugin:setup(...)
SETUP_CALLEE_TYPES = ("dot_index_expression", "method_index_expression")


def _single_argument(args: Node) -> Optional[Node]:
    """Reduce an ``arguments`` node to its only expression, if it has one."""
    exprs = [child for child in args.named_children if child.type != "comment"]
    if len(exprs) != 1:
        return None
    return exprs[0]


def args_to_string(args: Node) -> Optional[str]:
    """
    Turn call arguments into a string if possible.

    This handles two cases:
    1. the call passes a bare string, ``f "x"``
    2. the call passes an argument list with a single string, ``f("x")``
    """
    expr = _single_argument(args)
    if expr is None or expr.type != "string":
        return None
    return string_value(expr)


def args_to_table(args: Node) -> Optional[Node]:
    """Same as args_to_string, for a single table constructor argument."""
    expr = _single_argument(args)
    if expr is None or expr.type != "table_constructor":
        return None
    return expr


def split_module(module: str) -> Tuple[str, str]:
    """Split ``"plugin.sub.mod"`` into the root and a dotted command prefix."""
    root, _, prefix = module.partition(".")
    return root, prefix


class LuaBlockExtractor:
    """
    Extract keybindings from lua source blocks.

    The parser is created once and reused for every block of a file.
    """

    def __init__(self) -> None:
        self.parser = tree_sitter.Parser(LUA_LANGUAGE)

    def extract(self, source: str) -> List[Keybinding]:
        """
        Parse a lua block and collect keybindings from every setup call.

        Statements that do not have the ``name("x").prop({...})`` shape are
        ignored. Syntax errors are not fatal; broken statements just do not
        match.
        """
        tree = self.parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            logger.debug("Lua block contains syntax errors, extracting what parses")

        bindings: List[Keybinding] = []
        for statement in tree.root_node.named_children:
            found = self._extract_statement(statement)
            if found:
                bindings.extend(found)
        return bindings

    def _extract_statement(self, statement: Node) -> Optional[List[Keybinding]]:
        if statement.type != "function_call":
            return None

        callee = statement.child_by_field_name("name")
        if callee is None or callee.type not in SETUP_CALLEE_TYPES:
            return None

        inner = callee.child_by_field_name("table")
        if inner is None or inner.type != "function_call":
            return None

        inner_name = inner.child_by_field_name("name")
        inner_args = inner.child_by_field_name("arguments")
        if inner_name is None or inner_args is None:
            return None
        if inner_name.type != "identifier":
            logger.debug(f"Ignored root: {inner_args.text!r}")
            return None

        module = args_to_string(inner_args)
        if not module:
            return None

        outer_args = statement.child_by_field_name("arguments")
        table = args_to_table(outer_args) if outer_args is not None else None
        if table is None:
            return None

        return self._create_bindings(module, table)

    def _create_bindings(self, module: str, table: Node) -> List[Keybinding]:
        root, prefix = split_module(module)
        if not root:
            logger.debug(f"Ignored module without a root: {module!r}")
            return []
        bindings = walk_table(table, root)
        if prefix:
            for binding in bindings:
                binding.command = f"{prefix}.{binding.command}"

        logger.debug(f"Found {len(bindings)} keybindings for {root}")
        return bindings


def extract_block(source: str) -> List[Keybinding]:
    """
    Convenience function to extract keybindings from a single lua block.

    Returns:
        List of root-tagged Keybinding objects
    """
    return LuaBlockExtractor().extract(source)

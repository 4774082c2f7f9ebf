"""
nvkeydoc keybinding extraction.

Usage:
    from nvkeydoc.keybindings import DocResolver, discover_definitions, scan_file

    keybindings = scan_file(Path("~/.config/nvim/init.vim").expanduser())
    DocResolver(discover_definitions(definitions_dir)).resolve(keybindings)

    for keybinding in keybindings:
        if keybinding.doc:
            print(keybinding.keymap, keybinding.doc.description)
"""

from .docs import DocCacheEntry, DocResolver, DocState, discover_definitions
from .lua import LuaBlockExtractor, extract_block
from .models import Keybinding, KeybindingDoc
from .scanner import ConfigScanner, ParseMode, scan, scan_file
from .walker import walk_table

__all__ = [
    "Keybinding",
    "KeybindingDoc",
    "ConfigScanner",
    "ParseMode",
    "scan",
    "scan_file",
    "LuaBlockExtractor",
    "extract_block",
    "walk_table",
    "DocResolver",
    "DocCacheEntry",
    "DocState",
    "discover_definitions",
]

"""
Scanner for vimscript configuration files.

Walks init.vim line by line and collects:

- ``map`` family statements (``nnoremap <silent> gj :Next<CR>``), using the
  comment lines directly above a statement as its description
- ``lua << EOF`` ... ``EOF`` blocks, which are handed to the lua extractor
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from nvkeydoc.exceptions import (
    FileReadError,
    InvalidBlockOpenerError,
    UnmatchedTerminatorError,
    UnterminatedBlockError,
)

from .lua import LuaBlockExtractor
from .models import Keybinding, KeybindingDoc

logger = logging.getLogger(__name__)

MAP_REGEX = re.compile(
    r"^(?P<mode>[nvsxomilct])?(?P<nonrecursive>nore)?map\s+(?:<silent>\s+)?"
    r"(?P<shortcut>\S+)\s+(?P<command>\S.*)$"
)

COMMENT_MARKER = '"'
LUA_KEYWORD = "lua"
LUA_BLOCK_OPENER = "lua<<EOF"  # compared with all whitespace removed
LUA_BLOCK_TERMINATOR = "EOF"


class ParseMode(Enum):
    """What the previous line was."""

    NEUTRAL = "neutral"
    COMMENT = "comment"
    BINDING = "binding"
    LUA_BLOCK = "lua_block"


class ConfigScanner:
    """
    Single forward pass over the lines of a vim configuration.

    Usage:
        scanner = ConfigScanner()
        bindings = scanner.scan(path.read_text().split("\n"))
    """

    def __init__(self, lua_extractor: Optional[LuaBlockExtractor] = None) -> None:
        self.lua_extractor = lua_extractor or LuaBlockExtractor()
        self._reset()

    def _reset(self) -> None:
        self.mode = ParseMode.NEUTRAL
        self.keybindings: List[Keybinding] = []
        self.comment_lines: List[str] = []
        self.lua_lines: List[str] = []
        self.block_start = 0

    def scan(self, lines: Iterable[str]) -> List[Keybinding]:
        """
        Scan the given lines and return all keybindings in file order.

        Raises:
            InvalidBlockOpenerError: a line starts with lua but is not ``lua <<EOF``
            UnmatchedTerminatorError: ``EOF`` outside of a lua block
            UnterminatedBlockError: input ends inside a lua block
        """
        self._reset()

        for line_number, line in enumerate(lines, start=1):
            self._scan_line(line_number, line.rstrip("\r\n"))

        if self.mode == ParseMode.LUA_BLOCK:
            raise UnterminatedBlockError(self.block_start)

        logger.debug(f"Scanned {len(self.keybindings)} keybindings")
        return self.keybindings

    def _scan_line(self, line_number: int, line: str) -> None:
        stripped = line.strip()

        if self.mode == ParseMode.LUA_BLOCK:
            if stripped == LUA_BLOCK_TERMINATOR:
                self._close_block()
            else:
                self.lua_lines.append(line + "\n")
            return

        if stripped == LUA_BLOCK_TERMINATOR:
            raise UnmatchedTerminatorError(line_number)

        if not stripped:
            self._clear(ParseMode.NEUTRAL)
            return

        if stripped.startswith(COMMENT_MARKER):
            self.comment_lines.append(stripped[len(COMMENT_MARKER):].strip())
            self.mode = ParseMode.COMMENT
            return

        match = MAP_REGEX.match(stripped)
        if match:
            self._add_binding(match)
            return

        if stripped.startswith(LUA_KEYWORD):
            if "".join(stripped.split()) != LUA_BLOCK_OPENER:
                raise InvalidBlockOpenerError(line_number)
            self.mode = ParseMode.LUA_BLOCK
            self.lua_lines = []
            self.block_start = line_number
            return

        self._clear(ParseMode.NEUTRAL)

    def _add_binding(self, match: re.Match) -> None:
        doc = None
        if self.mode == ParseMode.COMMENT:
            doc = KeybindingDoc(description=" ".join(self.comment_lines))

        self.keybindings.append(
            Keybinding(
                root="",
                keymap=match.group("shortcut"),
                command=match.group("command"),
                doc=doc,
            )
        )
        self._clear(ParseMode.BINDING)

    def _close_block(self) -> None:
        source = "".join(self.lua_lines)
        found = self.lua_extractor.extract(source)
        logger.debug(
            f"Lua block at line {self.block_start} yielded {len(found)} keybindings"
        )
        self.keybindings.extend(found)
        self.lua_lines = []
        self._clear(ParseMode.NEUTRAL)

    def _clear(self, mode: ParseMode) -> None:
        self.comment_lines = []
        self.mode = mode


def scan(lines: Iterable[str]) -> List[Keybinding]:
    """Convenience function to scan an iterable of lines."""
    return ConfigScanner().scan(lines)


def scan_file(path: Path) -> List[Keybinding]:
    """
    Read a vim configuration file (UTF-8) and scan it.

    Raises:
        FileReadError: if the file cannot be read
        ParseError: on structural errors, see ConfigScanner.scan
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Cannot read {path}: {e}", path=str(path)) from e

    logger.info(f"Parsing {path}")
    # splitlines() would also break on \x0c, \x85, \u2028 ...
    return ConfigScanner().scan(text.split("\n"))

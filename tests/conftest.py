"""Shared pytest fixtures for nvkeydoc tests."""

import json

import pytest

from nvkeydoc.keybindings import LuaBlockExtractor


INIT_VIM = '''\
set number
let mapleader = ","

" Jump to the next match
" and center it
nnoremap <silent> gj :Next<CR>

" Detached comment

vnoremap x y
map <leader>w :w<CR>

lua << EOF
require("telescope").setup({
  defaults = {
    mappings = {
      i = {
        ["<C-n>"] = "actions.move_selection_next",
        ["<C-c>"] = "actions.close",
      },
    },
  },
})
EOF

" Toggle the file tree
nnoremap <C-t> :NvimTreeToggle<CR>
'''

TELESCOPE_DEFINITIONS = {
    "defaults": {
        "mappings": {
            "i": {
                "actions_move_selection_next": {
                    "description": "Move to the next result",
                    "examples": ["<C-n>", "<Down>"],
                },
                "actions_close": {"description": "Close telescope"},
            }
        }
    }
}


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's real configuration."""
    monkeypatch.setenv("NVKEYDOC_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.delenv("NVKEYDOC_INITVIM", raising=False)
    monkeypatch.delenv("NVKEYDOC_DEFINITIONS", raising=False)


@pytest.fixture(scope="session")
def lua_extractor():
    """One tree-sitter parser for all lua tests."""
    return LuaBlockExtractor()


@pytest.fixture
def initvim_file(tmp_path):
    """Write a representative init.vim."""
    path = tmp_path / "init.vim"
    path.write_text(INIT_VIM, encoding="utf-8")
    return path


@pytest.fixture
def definitions_dir(tmp_path):
    """Create a definition directory with one telescope.json."""
    directory = tmp_path / "definitions"
    directory.mkdir()
    (directory / "telescope.json").write_text(json.dumps(TELESCOPE_DEFINITIONS))
    return directory

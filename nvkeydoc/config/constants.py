"""
Centralized constants for nvkeydoc.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

NVKEYDOC_CONFIG_DIR = Path.home() / ".config" / "nvkeydoc"
DEFAULT_CONFIG_FILE = NVKEYDOC_CONFIG_DIR / "config.yaml"
DEFAULT_DEFINITIONS_DIR = NVKEYDOC_CONFIG_DIR / "definitions"
DEFAULT_INITVIM = "~/.config/nvim/init.vim"

# =============================================================================
# OUTPUT
# =============================================================================

KEYMAP_COLUMN_WIDTH = 15  # Left column of the listing
RAW_ROOT_ALIAS = "vim"  # --root value selecting plain vimscript maps

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "NVKEYDOC_CONFIG": {
        "description": "Path of the YAML config file",
        "default": str(DEFAULT_CONFIG_FILE),
    },
    "NVKEYDOC_INITVIM": {
        "description": "Vim configuration file to parse",
        "default": DEFAULT_INITVIM,
        "setting": "initvim",
    },
    "NVKEYDOC_DEFINITIONS": {
        "description": "Directory of per-plugin JSON definition files",
        "default": str(DEFAULT_DEFINITIONS_DIR),
        "setting": "definitions",
    },
}

"""
nvkeydoc - keybinding documentation for Neovim configurations
"""

__version__ = "0.1.0"

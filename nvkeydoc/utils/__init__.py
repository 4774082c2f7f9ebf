"""Utility modules for nvkeydoc.

- logging: Logging configuration for the CLI
- output: Shared rich consoles and JSON output
"""

"""zeal Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for zeal source files.
- A lightweight indexer that scans and parses documents without evaluating them.
- A simple TCP REPL server that evaluates code via the Interpreter.

Note: The LSP never evaluates user buffers; diagnostics come from the scanner
and parser only.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]

"""
Parsing Layer

Tree-sitter based parsing for TypeScript/JavaScript evidence files.

Components:
- parser_registry: grammar management (thread-local parsers)
- source_file: source file representation
- ast_tree: AST wrapper with walk / find-first traversal
"""

from .ast_tree import AstTree
from .parser_registry import ParserRegistry, get_registry
from .source_file import SourceFile, read_source_text

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "read_source_text",
    "AstTree",
]

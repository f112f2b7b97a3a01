"""
Parser Registry for Tree-sitter

Manages the TypeScript-family grammars used by AST evidence matchers.
"""

import logging
import threading
from pathlib import Path

try:
    import tree_sitter_typescript
    from tree_sitter import Language, Parser
except ImportError as e:
    raise ImportError(
        "tree-sitter-typescript is required. " "Install with: pip install tree-sitter tree-sitter-typescript"
    ) from e

logger = logging.getLogger(__name__)

TYPESCRIPT = "typescript"
TSX = "tsx"

# JSX-capable grammar for anything that may contain JSX; plain TypeScript otherwise.
_EXT_MAP = {
    ".tsx": TSX,
    ".jsx": TSX,
    ".js": TSX,
    ".mjs": TSX,
    ".cjs": TSX,
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
}


class ParserRegistry:
    """
    Registry for TypeScript-family parsers.

    Supports:
    - TypeScript (.ts, .mts, .cts, and any unknown extension)
    - TSX / JavaScript (.tsx, .jsx, .js, .mjs, .cjs)

    Parser instances are not shared between threads: each thread gets its
    own parser per language.
    """

    def __init__(self):
        self._languages: dict[str, Language] = {
            TYPESCRIPT: Language(tree_sitter_typescript.language_typescript()),
            TSX: Language(tree_sitter_typescript.language_tsx()),
        }
        self._local = threading.local()
        logger.debug(f"Loaded parsers: {sorted(self._languages)}")

    def get_parser(self, language: str) -> Parser:
        """
        Get this thread's parser for the specified language.

        Args:
            language: "typescript" or "tsx"

        Returns:
            Parser instance

        Raises:
            ValueError: If language not supported
        """
        language = language.lower()
        lang = self._languages.get(language)
        if lang is None:
            raise ValueError(f"Language not supported: {language}")

        parsers: dict[str, Parser] | None = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = self._local.parsers = {}

        parser = parsers.get(language)
        if parser is None:
            parser = parsers[language] = Parser(lang)
        return parser

    def detect_language(self, file_path: str | Path) -> str:
        """
        Detect grammar from file extension.

        Unknown extensions fall back to TypeScript, which also accepts plain
        JavaScript without JSX.
        """
        return _EXT_MAP.get(Path(file_path).suffix.lower(), TYPESCRIPT)


# Global registry instance
_registry: ParserRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = ParserRegistry()
    return _registry

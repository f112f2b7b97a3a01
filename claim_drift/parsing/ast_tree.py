"""
AST Tree wrapper for Tree-sitter
"""

from collections.abc import Callable, Iterator

try:
    from tree_sitter import Node as TSNode
    from tree_sitter import Tree as TSTree
except ImportError as e:
    raise ImportError("tree-sitter is required. Install with: pip install tree-sitter") from e

from claim_drift.parsing.parser_registry import get_registry
from claim_drift.parsing.source_file import SourceFile


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Provides the traversal primitives evidence matchers need: a depth-first
    walk and a short-circuiting find-first search.
    """

    def __init__(self, source: SourceFile, tree: TSTree, source_bytes: bytes):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
            source_bytes: Encoded content the tree was parsed from
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._bytes = source_bytes

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Tree-sitter is error tolerant: syntax errors produce ERROR nodes,
        not exceptions, so a partially broken file still yields a tree.

        Raises:
            ValueError: If language not supported or parsing fails
        """
        parser = get_registry().get_parser(source.language)
        source_bytes = source.content.encode(source.encoding)
        tree = parser.parse(source_bytes)

        if tree is None:
            raise ValueError(f"Failed to parse file: {source.file_path}")

        return cls(source, tree, source_bytes)

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    @property
    def has_errors(self) -> bool:
        return self._root.has_error

    def walk(self, node: TSNode | None = None) -> Iterator[TSNode]:
        """
        Walk AST in depth-first pre-order.

        Uses an explicit stack instead of recursion.
        """
        stack = [node if node is not None else self._root]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def find_first(self, predicate: Callable[[TSNode], bool], node: TSNode | None = None) -> TSNode | None:
        """
        Return the first node (pre-order) satisfying `predicate`.

        Stops at the first hit; the rest of the tree is not visited.
        """
        for current in self.walk(node):
            if predicate(current):
                return current
        return None

    def any(self, predicate: Callable[[TSNode], bool]) -> bool:
        return self.find_first(predicate) is not None

    def text(self, node: TSNode) -> str:
        """Source text covered by `node`."""
        return self._bytes[node.start_byte : node.end_byte].decode(self.source.encoding, errors="replace")

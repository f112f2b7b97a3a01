"""Source Cache.

Per-run memo of file text and parsed syntax trees, keyed by absolute path.
Several evidence specs commonly target the same file; each file is read
and parsed at most once per run.

Entries are write-once: the first reader populates a key and later readers
get the cached value (insert-if-absent via dict.setdefault).
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from claim_drift.parsing import AstTree, SourceFile, get_registry, read_source_text

logger = logging.getLogger(__name__)


class SourceCache:
    """Text and AST cache for one scan.

    Construct one per run and pass it to the matcher; there is no
    process-wide instance, so concurrent runs never share entries.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._texts: dict[str, str] = {}
        self._trees: dict[str, AstTree] = {}

    @staticmethod
    def _key(path: str | Path) -> str:
        return str(Path(path).absolute())

    def get_text(self, path: str | Path) -> str:
        """Raw file text.

        Raises:
            ParseFailure: If the file cannot be read
        """
        key = self._key(path)
        cached = self._texts.get(key)
        if cached is not None:
            return cached
        return self._texts.setdefault(key, read_source_text(key, self.encoding))

    def get_tree(self, path: str | Path) -> AstTree:
        """Parsed syntax tree (reuses cached text).

        Raises:
            ParseFailure: If the file cannot be read
        """
        key = self._key(path)
        cached = self._trees.get(key)
        if cached is not None:
            return cached

        source = SourceFile.from_content(
            file_path=key,
            content=self.get_text(key),
            language=get_registry().detect_language(key),
            encoding=self.encoding,
        )
        tree = AstTree.parse(source)
        if tree.has_errors:
            logger.debug(f"{key} parsed with syntax errors")
        return self._trees.setdefault(key, tree)

    def warm(self, paths: Iterable[str | Path], max_workers: int, parse: bool = True) -> int:
        """Read (and optionally parse) distinct existing paths on a thread pool.

        Only a performance optimization: evaluation order and results are
        unaffected. Read failures are left for the matcher to raise when
        the file is actually needed.

        Returns:
            Number of files now cached
        """
        keys = sorted({self._key(p) for p in paths if p and Path(p).is_file()})
        pending = [k for k in keys if k not in self._texts]
        if max_workers < 2 or len(pending) < 2:
            return len(self._texts)

        def load(key: str) -> None:
            try:
                if parse:
                    self.get_tree(key)
                else:
                    self.get_text(key)
            except Exception as e:
                logger.debug(f"Prefetch skipped {key}: {e}")

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            list(executor.map(load, pending))

        logger.debug(f"Prefetched {len(pending)} files with {max_workers} workers")
        return len(self._texts)

    def clear(self) -> None:
        self._texts.clear()
        self._trees.clear()

    def __len__(self) -> int:
        return len(self._texts)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and self._key(path) in self._texts

"""Per-run source cache and parsing."""

import logging

import pytest

from claim_drift.errors import ParseFailure
from claim_drift.matching import SourceCache
from claim_drift.parsing import AstTree, SourceFile, get_registry


class TestSourceCache:
    def test_text_read_once(self, write_file):
        path = write_file("a.ts", "export const a = 1;\n")
        cache = SourceCache()
        first = cache.get_text(path)
        path.write_text("changed", encoding="utf-8")
        assert cache.get_text(path) is first
        assert path in cache
        assert len(cache) == 1

    def test_tree_parsed_once(self, write_file):
        path = write_file("a.ts", "export const a = 1;\n")
        cache = SourceCache()
        assert cache.get_tree(path) is cache.get_tree(str(path))

    def test_tree_reuses_text(self, write_file):
        path = write_file("a.ts", "export const a = 1;\n")
        cache = SourceCache()
        cache.get_text(path)
        path.write_text("export const b = 2;\n", encoding="utf-8")
        tree = cache.get_tree(path)
        assert "a = 1" in tree.text(tree.root)

    def test_separate_caches_do_not_share(self, write_file):
        path = write_file("a.ts", "one")
        first = SourceCache()
        first.get_text(path)
        path.write_text("two", encoding="utf-8")
        assert SourceCache().get_text(path) == "two"

    def test_missing_file_raises(self, repo):
        with pytest.raises(ParseFailure):
            SourceCache().get_text(repo / "missing.ts")

    def test_clear(self, write_file):
        path = write_file("a.ts", "x")
        cache = SourceCache()
        cache.get_tree(path)
        cache.clear()
        assert len(cache) == 0
        assert path not in cache

    def test_warm_parallel(self, write_file, repo):
        paths = [write_file(f"src/m{i}.ts", f"export const v{i} = {i};\n") for i in range(6)]
        cache = SourceCache()
        cached = cache.warm([*paths, repo / "missing.ts"], max_workers=4)
        assert cached == 6
        assert all(p in cache for p in paths)

    def test_warm_sequential_is_noop(self, write_file):
        paths = [write_file(f"m{i}.ts", "x") for i in range(3)]
        cache = SourceCache()
        assert cache.warm(paths, max_workers=1) == 0

    def test_warm_skips_unreadable(self, write_file, repo):
        good = write_file("good.ts", "export const ok = 1;\n")
        other = write_file("other.ts", "export const other = 1;\n")
        bad = repo / "bad.ts"
        bad.write_bytes(b"\xff\xfe\xfa")
        cache = SourceCache()
        cache.warm([good, other, bad], max_workers=2)
        assert good in cache
        assert bad not in cache


class TestParsing:
    @pytest.mark.parametrize(
        "filename, language",
        [
            ("a.ts", "typescript"),
            ("a.mts", "typescript"),
            ("a.tsx", "tsx"),
            ("a.jsx", "tsx"),
            ("a.js", "tsx"),
            ("a.cjs", "tsx"),
            ("a.unknown", "typescript"),
        ],
    )
    def test_detect_language(self, filename, language):
        assert get_registry().detect_language(filename) == language

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            get_registry().get_parser("cobol")

    def test_tsx_parses_cleanly(self, write_file):
        path = write_file("view.tsx", "export const View = () => <b>hi</b>;\n")
        tree = SourceCache().get_tree(path)
        assert tree.source.language == "tsx"
        assert not tree.has_errors

    def test_syntax_errors_logged_and_cached(self, write_file, caplog):
        path = write_file("broken.ts", "export function (( {")
        cache = SourceCache()
        with caplog.at_level(logging.DEBUG, logger="claim_drift.matching.source_cache"):
            tree = cache.get_tree(path)
        assert tree.has_errors
        assert "parsed with syntax errors" in caplog.text
        assert cache.get_tree(path) is tree

    def test_syntax_errors_still_parse(self):
        source = SourceFile.from_content("broken.ts", "export function (( {", "typescript")
        assert AstTree.parse(source).has_errors

    def test_find_first_preorder(self):
        source = SourceFile.from_content("a.ts", "const a = f(g(1));\n", "typescript")
        tree = AstTree.parse(source)
        first_call = tree.find_first(lambda n: n.type == "call_expression")
        assert tree.text(first_call) == "f(g(1))"

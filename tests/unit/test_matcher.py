"""Evidence matchers against real TypeScript / workflow fixtures."""

import pytest

from claim_drift.errors import ParseFailure, SchemaError, UnsupportedMatcherError
from claim_drift.matching import FILE_NOT_FOUND, EvidenceMatcher, SourceCache, default_marker
from claim_drift.types import MatcherType

WORKFLOW = """\
name: ci
jobs:
  build:
    steps:
      - name: Checkout
        uses: actions/checkout@v4
      - name: Run claim drift scan
        run: claim-drift scan --mode enforce
"""


@pytest.fixture
def matcher():
    return EvidenceMatcher(SourceCache())


class TestMatcherFixtureTable:
    """Reference fixtures for each matcher"""

    @pytest.mark.parametrize(
        "filename, content, matcher_type, pattern, expected",
        [
            ("api.ts", "export function handler() {}\n", MatcherType.AST_EXPORT, "handler", True),
            ("api.ts", "function handler() {}\n", MatcherType.AST_EXPORT, "handler", False),
            ("client.ts", "const r = api.fetch(url);\n", MatcherType.AST_FUNCTION_CALL, "fetch", True),
            ("consts.ts", "import x from 'y';\nexport const FOO = 1;\n", MatcherType.REGEX, "/^export const FOO/m", True),
        ],
    )
    def test_fixture(self, matcher, write_file, filename, content, matcher_type, pattern, expected):
        path = write_file(filename, content)
        assert matcher.match("claim-1", path, matcher_type, pattern).matched is expected

    def test_default_marker_tag(self, matcher, write_file):
        path = write_file("auth.ts", "// @claim-evidence:claim-42\nexport const x = 1;\n")
        result = matcher.match("claim-42", path, MatcherType.MARKER_TAG, "")
        assert result.matched
        assert result.details == "marker:@claim-evidence:claim-42"


class TestAstExport:
    @pytest.mark.parametrize(
        "content, name",
        [
            ("export class Service {}", "Service"),
            ("export abstract class Base {}", "Base"),
            ("export interface Props { a: string }", "Props"),
            ("export type Id = string;", "Id"),
            ("export enum Color { Red }", "Color"),
            ("export const A = 1, B = 2;", "B"),
            ("export let counter = 0;", "counter"),
            ("export var legacy = true;", "legacy"),
            ("export async function load() {}", "load"),
            ("export function* items() {}", "items"),
            ("export default function main() {}", "main"),
        ],
    )
    def test_exported_declarations(self, matcher, write_file, content, name):
        path = write_file("mod.ts", content + "\n")
        assert matcher.match("c", path, MatcherType.AST_EXPORT, name).matched

    def test_name_must_match_exactly(self, matcher, write_file):
        path = write_file("mod.ts", "export function handlerV2() {}\n")
        assert not matcher.match("c", path, MatcherType.AST_EXPORT, "handler").matched

    def test_export_clause_not_counted(self, matcher, write_file):
        path = write_file("mod.ts", "function handler() {}\nexport { handler };\n")
        assert not matcher.match("c", path, MatcherType.AST_EXPORT, "handler").matched

    def test_comment_mention_not_counted(self, matcher, write_file):
        path = write_file("mod.ts", "// export function handler() {}\n")
        assert not matcher.match("c", path, MatcherType.AST_EXPORT, "handler").matched

    def test_tsx_file(self, matcher, write_file):
        path = write_file("Page.tsx", "export function Page() {\n  return <div className='x'>hi</div>;\n}\n")
        assert matcher.match("c", path, MatcherType.AST_EXPORT, "Page").matched

    def test_javascript_file(self, matcher, write_file):
        path = write_file("util.js", "export const helper = () => 1;\n")
        assert matcher.match("c", path, MatcherType.AST_EXPORT, "helper").matched


class TestAstFunctionCall:
    def test_plain_call(self, matcher, write_file):
        path = write_file("a.ts", "fetch('/api');\n")
        assert matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "fetch").matched

    def test_chained_member_call(self, matcher, write_file):
        path = write_file("a.ts", "this.client.http.fetch(url);\n")
        assert matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "fetch").matched

    def test_full_callee_text(self, matcher, write_file):
        path = write_file("a.ts", "audit.log('x');\n")
        assert matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "audit.log").matched

    def test_suffix_requires_dot_boundary(self, matcher, write_file):
        path = write_file("a.ts", "prefetch(url);\n")
        assert not matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "fetch").matched

    def test_reference_without_call(self, matcher, write_file):
        path = write_file("a.ts", "const f = fetch;\n")
        assert not matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "fetch").matched

    def test_nested_call_found(self, matcher, write_file):
        path = write_file("a.ts", "export function run() {\n  return wrap(() => validateToken(t));\n}\n")
        assert matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "validateToken").matched

    def test_tagged_template_not_a_call(self, matcher, write_file):
        path = write_file("a.ts", "const q = sql`select 1`;\n")
        assert not matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "sql").matched

    def test_empty_pattern_never_matches(self, matcher, write_file):
        path = write_file("a.ts", "fetch(url);\n")
        assert not matcher.match("c", path, MatcherType.AST_FUNCTION_CALL, "  ").matched


class TestAstRouteHandler:
    def test_lowercase_pattern_uppercased(self, matcher, write_file):
        path = write_file("route.ts", "export async function GET(req: Request) { return new Response('ok'); }\n")
        result = matcher.match("c", path, MatcherType.AST_ROUTE_HANDLER, "get")
        assert result.matched
        assert result.details == "ast_route_handler:get"

    def test_arrow_handler(self, matcher, write_file):
        path = write_file("route.ts", "export const POST = async (req: Request) => new Response('ok');\n")
        assert matcher.match("c", path, MatcherType.AST_ROUTE_HANDLER, "POST").matched

    def test_unexported_handler(self, matcher, write_file):
        path = write_file("route.ts", "async function DELETE() {}\n")
        assert not matcher.match("c", path, MatcherType.AST_ROUTE_HANDLER, "DELETE").matched

    def test_empty_pattern(self, matcher, write_file):
        path = write_file("route.ts", "export function GET() {}\n")
        assert not matcher.match("c", path, MatcherType.AST_ROUTE_HANDLER, " ").matched


class TestWorkflowStep:
    def test_step_name(self, matcher, write_file):
        path = write_file(".github/workflows/ci.yml", WORKFLOW)
        assert matcher.match("c", path, MatcherType.AST_WORKFLOW_STEP, "Run claim drift scan").matched

    def test_partial_name_does_not_match(self, matcher, write_file):
        path = write_file(".github/workflows/ci.yml", WORKFLOW)
        assert not matcher.match("c", path, MatcherType.AST_WORKFLOW_STEP, "Run claim").matched

    def test_pattern_is_literal(self, matcher, write_file):
        path = write_file("ci.yml", "steps:\n  - name: Build (x86)\n")
        assert matcher.match("c", path, MatcherType.AST_WORKFLOW_STEP, "Build (x86)").matched


class TestTextMatchers:
    def test_explicit_marker_tag(self, matcher, write_file):
        path = write_file("a.ts", "// @stub\n")
        assert matcher.match("c", path, MatcherType.MARKER_TAG, "@stub").matched

    def test_marker_tag_is_claim_specific(self, matcher, write_file):
        path = write_file("a.ts", f"// {default_marker('claim-4')}\n")
        assert not matcher.match("claim-42", path, MatcherType.MARKER_TAG, "").matched

    def test_bare_regex(self, matcher, write_file):
        path = write_file("a.ts", "const x = 1;\nthrow new Error('not implemented');\n")
        result = matcher.match("c", path, MatcherType.REGEX, r"throw new Error\('not implemented'\)")
        assert result.matched
        assert result.details.startswith("regex:/")

    def test_invalid_regex(self, matcher, write_file):
        path = write_file("a.ts", "x")
        with pytest.raises(SchemaError):
            matcher.match("c", path, MatcherType.REGEX, "/[/")


class TestDispatch:
    def test_missing_file(self, matcher, repo):
        result = matcher.match("c", repo / "nope.ts", MatcherType.AST_EXPORT, "x")
        assert not result.matched
        assert result.details == FILE_NOT_FOUND

    def test_empty_path(self, matcher):
        assert matcher.match("c", "", MatcherType.REGEX, "x").details == FILE_NOT_FOUND

    def test_string_matcher_type(self, matcher, write_file):
        path = write_file("a.ts", "export const x = 1;\n")
        assert matcher.match("c", path, "ast_export", "x").matched

    def test_unknown_matcher_type_rejected(self, matcher, write_file):
        path = write_file("a.ts", "x")
        with pytest.raises(UnsupportedMatcherError):
            matcher.match("c", path, "semantic_similarity", "x")

    def test_unknown_matcher_rejected_even_without_file(self, matcher, repo):
        with pytest.raises(UnsupportedMatcherError):
            matcher.match("c", repo / "nope.ts", "bogus", "x")

    def test_undecodable_file(self, matcher, repo):
        path = repo / "binary.ts"
        path.write_bytes(b"\xff\xfe\xfa\x00export")
        with pytest.raises(ParseFailure):
            matcher.match("c", path, MatcherType.REGEX, "export")

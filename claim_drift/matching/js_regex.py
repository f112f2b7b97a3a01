"""JavaScript-style regex patterns.

Ledger authors write regex evidence the way they would in the scanned
codebase: either a bare pattern (tested with the multiline flag) or a
slash-delimited literal such as `/^export const FOO/m`.

Supported flags:
    i -> re.IGNORECASE
    m -> re.MULTILINE
    s -> re.DOTALL
    y -> sticky: match only at the start of the text
    g, u, d, v -> accepted, no effect on a single boolean test

Digit and word classes are ASCII-only, and without `m` a `$` matches
only at the very end of the text.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from claim_drift.errors import SchemaError

_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
_NO_EFFECT_FLAGS = frozenset("gudv")
_STICKY_FLAG = "y"
_DEFAULT_FLAGS = "m"

# Named groups: (?<name>...) and \k<name> are spelled differently in Python.
_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")
_NAMED_BACKREF = re.compile(r"\\k<([A-Za-z_][A-Za-z0-9_]*)>")


@dataclass(frozen=True)
class JsRegex:
    """Compiled JS-style regex."""

    source: str
    flags: str
    pattern: re.Pattern[str]
    sticky: bool = False

    def test(self, text: str) -> bool:
        if self.sticky:
            return self.pattern.match(text) is not None
        return self.pattern.search(text) is not None

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"


def split_literal(raw: str) -> tuple[str, str]:
    """Split `/body/flags` into (body, flags); bare patterns get the default flags."""
    last_slash = raw.rfind("/")
    if raw.startswith("/") and last_slash > 0:
        return raw[1:last_slash], raw[last_slash + 1 :] or _DEFAULT_FLAGS
    return raw, _DEFAULT_FLAGS


def _anchor_dollar_at_end(pattern: str) -> str:
    r"""Rewrite bare `$` (outside classes and escapes) to `\Z`.

    Without the multiline flag, JS `$` matches only at the very end of the
    text; Python `$` also matches before a trailing newline.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "$" and not in_class:
            ch = r"\Z"
        out.append(ch)
        i += 1
    return "".join(out)


@lru_cache(maxsize=512)
def parse_js_regex(raw: str) -> JsRegex:
    """Compile a ledger regex.

    Raises:
        SchemaError: unknown/duplicate flags or a pattern that does not compile
    """
    body, flags = split_literal(raw)

    re_flags = re.ASCII
    for flag in flags:
        if flags.count(flag) > 1:
            raise SchemaError(f"duplicate regex flag '{flag}' in {raw!r}", pattern=raw)
        if flag in _FLAG_MAP:
            re_flags |= _FLAG_MAP[flag]
        elif flag not in _NO_EFFECT_FLAGS and flag != _STICKY_FLAG:
            raise SchemaError(f"invalid regex flag '{flag}' in {raw!r}", pattern=raw)

    translated = _NAMED_BACKREF.sub(r"(?P=\1)", _NAMED_GROUP.sub("(?P<", body))
    if "m" not in flags:
        translated = _anchor_dollar_at_end(translated)
    try:
        compiled = re.compile(translated, re_flags)
    except re.error as e:
        raise SchemaError(f"invalid regex {raw!r}: {e}", pattern=raw) from e

    return JsRegex(source=body, flags=flags, pattern=compiled, sticky=_STICKY_FLAG in flags)

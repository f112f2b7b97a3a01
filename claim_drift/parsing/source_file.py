"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path

from claim_drift.errors import ParseFailure


@dataclass(frozen=True)
class SourceFile:
    """
    A source file read from the scanned tree.

    Attributes:
        file_path: Absolute path the content was read from
        content: File content as string
        language: Grammar used for parsing ("typescript" or "tsx")
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"

    @classmethod
    def from_content(
        cls,
        file_path: str,
        content: str,
        language: str,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """Create source file from content string."""
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            encoding=encoding,
        )


def read_source_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a file as text, raising ParseFailure on OS or decoding errors."""
    try:
        return Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseFailure(f"cannot read {path}: {e}", path=str(path)) from e

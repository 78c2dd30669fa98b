"""Import configuration dataclass."""

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_KEYWORD_SEPARATOR = ","
DEFAULT_PROBE_LINE_LIMIT = 50


@dataclass
class ImportConfig:
    """Configuration for EndNote XML imports.

    Attributes
    ----------
    keyword_separator : str
        Separator used to realize the keyword list as a single field value
        (default: ","). A single space is added after each separator.
    probe_line_limit : int
        Number of leading lines inspected by the format probe (default: 50).
    huge_tree : bool
        Lift lxml's safety limits on text node size and tree depth, for very
        large exports (default: False).
    """

    keyword_separator: str = DEFAULT_KEYWORD_SEPARATOR
    probe_line_limit: int = DEFAULT_PROBE_LINE_LIMIT
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate."""
        if not self.keyword_separator or not self.keyword_separator.strip():
            raise ValueError(
                f"keyword_separator must be a non-blank string, got {self.keyword_separator!r}"
            )

        if self.probe_line_limit < 1:
            raise ValueError(f"probe_line_limit must be >= 1, got {self.probe_line_limit}")

    def join_keywords(self, keywords: list[str]) -> str:
        """Join keywords with the configured separator."""
        return f"{self.keyword_separator} ".join(keywords)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

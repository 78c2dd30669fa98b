"""Unit tests for import configuration."""

import pytest

from endnotexml.config import ImportConfig


@pytest.mark.unit
def test_config_defaults() -> None:
    """Test default values."""
    config = ImportConfig()
    assert config.keyword_separator == ","
    assert config.probe_line_limit == 50
    assert config.huge_tree is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"keyword_separator": ""},
        {"keyword_separator": "  "},
        {"probe_line_limit": 0},
    ],
)
def test_config_validation(kwargs: dict) -> None:
    """Test invalid values are rejected."""
    with pytest.raises(ValueError):
        ImportConfig(**kwargs)


@pytest.mark.unit
def test_join_keywords() -> None:
    """Test keywords are joined with separator plus space."""
    assert ImportConfig().join_keywords(["a", "b", "a"]) == "a, b, a"
    assert ImportConfig(keyword_separator=";").join_keywords(["a"]) == "a"


@pytest.mark.unit
def test_config_to_dict() -> None:
    """Test serialization to a plain dict."""
    assert ImportConfig(keyword_separator=";").to_dict() == {
        "keyword_separator": ";",
        "probe_line_limit": 50,
        "huge_tree": False,
    }

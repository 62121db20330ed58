"""Validation tests."""

import pytest
from returns.result import Failure, Success

from core import (
    JSONParseError,
    PageValidator,
    ValidationError,
    parse_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
    validate_page_data,
)


def page(components):
    return {"id": "p", "name": "P", "slug": "p", "components": components}


def test_validate_json_size():
    """Test JSON size validation."""
    validate_json_size('{"test": "data"}', 1000)  # Should pass

    with pytest.raises(JSONParseError):
        validate_json_size("x" * 2000, 1000)


def test_validate_json_depth():
    """Test JSON depth validation."""
    validate_json_depth({"a": {"b": {"c": 1}}}, max_depth=5)

    deep = {"level": 1}
    current = deep
    for i in range(25):
        current["nested"] = {"level": i + 2}
        current = current["nested"]

    with pytest.raises(ValidationError):
        validate_json_depth(deep, max_depth=20)


def test_page_validator_accepts_nested_unique_ids():
    PageValidator.validate(page([
        {"id": "a", "children": [{"id": "b"}, {"id": "c", "children": [{"id": "d"}]}]},
    ]))


@pytest.mark.parametrize("bad,message", [
    ([], "must be an object"),
    ({"id": "p", "name": "P", "slug": "p"}, "components"),
    ({"id": "p", "name": "P", "slug": "p", "components": {}}, "must be a list"),
    (page([{"id": "a", "children": [{"id": "a"}]}]), "Duplicate component id 'a'"),
    (page([{"id": ["a"]}]), "must be a string, got list"),
    (page([{"id": "a", "children": [{"id": {"nested": 1}}]}]), "must be a string, got dict"),
])
def test_page_validator_rejects(bad, message):
    with pytest.raises(ValidationError, match=message):
        PageValidator.validate(bad)


def test_validate_page_data_result():
    assert validate_page_data(page([])) == Success(None)

    result = validate_page_data(page([{"id": "x"}, {"id": "x"}]))
    assert isinstance(result, Failure)
    assert result.failure().value == "p"


def test_parse_json():
    assert parse_json('{"a": [1, 2]}') == {"a": [1, 2]}
    assert parse_json(b"null") is None

    with pytest.raises(JSONParseError):
        parse_json("{broken")


def test_parse_json_too_deep_to_decode():
    levels = 200_000
    with pytest.raises(JSONParseError, match="too deep"):
        parse_json("[" * levels + "]" * levels)


def test_safe_json_dumps_handles_decimal():
    from decimal import Decimal

    assert parse_json(safe_json_dumps({"price": Decimal("1.50")})) == {"price": "1.50"}

"""Validation of untrusted page data (persisted blobs, imported pages)."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure


# Validation limits
MAX_BLOB_SIZE = 1024 * 1024  # 1MB
MAX_JSON_DEPTH = 64


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth before building models from it.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def collect_component_ids(components: list[Any]) -> list[str]:
    """
    Pre-order list of component ids found in a raw component list.

    Raises:
        ValidationError: If a component id is not a string
    """
    ids: list[str] = []
    stack = list(reversed(components))
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue
        if "id" in node:
            if not isinstance(node["id"], str):
                raise ValidationError(f"Component id must be a string, got {type(node['id']).__name__}")
            ids.append(node["id"])
        children = node.get("children") or []
        if isinstance(children, list):
            stack.extend(reversed(children))
    return ids


class PageValidator:
    """Validates raw page dictionaries."""

    REQUIRED_FIELDS = ("id", "name", "slug", "components")

    @staticmethod
    def validate(page: Any, max_depth: int = MAX_JSON_DEPTH) -> None:
        """
        Validate page structure.

        Args:
            page: Decoded page dictionary
            max_depth: Maximum nesting depth

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(page, dict):
            raise ValidationError(f"Page must be an object, got {type(page).__name__}")

        validate_json_depth(page, max_depth)

        for name in PageValidator.REQUIRED_FIELDS:
            if name not in page:
                raise ValidationError(f"Page missing required '{name}' field")

        if not isinstance(page["components"], list):
            raise ValidationError("Page 'components' must be a list")

        seen: set[str] = set()
        for component_id in collect_component_ids(page["components"]):
            if component_id in seen:
                raise ValidationError(f"Duplicate component id '{component_id}'")
            seen.add(component_id)


def validate_page_data(page: Any, max_depth: int = MAX_JSON_DEPTH) -> Result[None, ValidationResult]:
    """
    Validate a raw page (Result pattern version).

    Args:
        page: Decoded page dictionary
        max_depth: Maximum nesting depth

    Returns:
        Result indicating success or validation error
    """
    try:
        PageValidator.validate(page, max_depth)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="page", value=page.get("id") if isinstance(page, dict) else None))

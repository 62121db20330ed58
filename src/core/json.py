"""Fast JSON encoding and decoding with multiple backends."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def parse_json(text: str | bytes) -> Any:
    """
    Parse a JSON document.

    Args:
        text: Serialized JSON

    Returns:
        Decoded value (dict, list, scalar or None)

    Raises:
        JSONParseError: If the text is not valid JSON or nests too deeply to decode
    """
    data = text.encode("utf-8") if isinstance(text, str) else text

    # Try msgspec first (fastest)
    try:
        return msgspec.json.decode(data)
    except msgspec.DecodeError:
        pass
    except RecursionError as e:
        raise JSONParseError("JSON nesting too deep to decode", e)

    # Standard library gives the better error message
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise JSONParseError(f"Invalid JSON: {e}", e)
    except RecursionError as e:
        raise JSONParseError("JSON nesting too deep to decode", e)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., Decimal, big integers)
            pass

        # msgspec handles Decimal and big integers
        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, default=str)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Validate JSON size before decoding.

    Args:
        data: JSON string to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")

"""ID Generation System.

Centralized ULID-based ID management for the page builder.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (cmp_*, page_*, ...)
- Copy ids: ``{original}_copy_{timestamp_ms}`` for duplicated components
"""

import time
from collections.abc import Callable, Container
from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

ComponentID = NewType("ComponentID", str)
"""Page component identifier"""

PageID = NewType("PageID", str)
"""Page identifier"""

# ============================================================================
# ID Prefixes (for debugging and type identification)
# ============================================================================


class Prefix:
    """ID prefix constants."""

    COMPONENT = "cmp"
    PAGE = "page"


COPY_MARKER = "_copy_"

# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


# Singleton instance
_generator = Generator()

# ============================================================================
# Typed ID Generators
# ============================================================================


def new_component_id() -> ComponentID:
    """Generate new component ID."""
    return ComponentID(_generator.generate_with_prefix(Prefix.COMPONENT))


def new_page_id() -> PageID:
    """Generate new page ID."""
    return PageID(_generator.generate_with_prefix(Prefix.PAGE))


def copy_id(
    original: str,
    taken: Container[str],
    clock: Callable[[], int] | None = None,
) -> ComponentID:
    """Mint the id of a duplicated component.

    The id has the form ``{original}_copy_{timestamp_ms}``. When that id is
    already in ``taken`` (two copies in the same millisecond), the timestamp
    is bumped until it is free.

    Args:
        original: Id of the component being copied
        taken: Ids already present in the tree
        clock: Millisecond clock (defaults to wall clock)

    Returns:
        Unused copy id
    """
    now = clock() if clock else time.time_ns() // 1_000_000
    candidate = f"{original}{COPY_MARKER}{now}"
    while candidate in taken:
        now += 1
        candidate = f"{original}{COPY_MARKER}{now}"
    return ComponentID(candidate)

"""Versioned persistence of pages, current page and store info."""

from typing import Any

from pydantic import ValidationError as ModelValidationError
from returns.result import Failure

from core import (
    JSONParseError,
    LogContext,
    ValidationError,
    get_logger,
    parse_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
    validate_page_data,
)
from core.validate import MAX_BLOB_SIZE, MAX_JSON_DEPTH
from .models import Page, StoreInfo
from .storage import KeyValueStorage

logger = get_logger(__name__)

PAGES_KEY = "builderPages"
CURRENT_PAGE_KEY = "currentPage"
STORE_INFO_KEY = "storeInfo"

SCHEMA_VERSION = 1


class PagePersistence:
    """
    Reads and writes the builder's three blobs under fixed keys.

    Every blob is wrapped in an envelope ``{"schema_version": 1, "data": ...}``.
    Loading is fail-soft: a missing, corrupt, oversized, too deep, wrongly
    versioned or invalid blob is logged and skipped, never raised.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        max_blob_size: int = MAX_BLOB_SIZE,
        max_depth: int = MAX_JSON_DEPTH,
    ) -> None:
        self.storage = storage
        self.max_blob_size = max_blob_size
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def _write(self, key: str, data: Any) -> None:
        envelope = {"schema_version": SCHEMA_VERSION, "data": data}
        self.storage.set_item(key, safe_json_dumps(envelope))

    def save(self, pages: list[Page], current_page: Page | None, store_info: StoreInfo) -> None:
        """Persist all three blobs."""
        self._write(PAGES_KEY, [page.model_dump(mode="json") for page in pages])
        self._write(
            CURRENT_PAGE_KEY,
            current_page.model_dump(mode="json") if current_page is not None else None,
        )
        self.save_store_info(store_info)
        logger.info("pages_saved", pages=len(pages), current_page=current_page.id if current_page else None)

    def save_store_info(self, store_info: StoreInfo) -> None:
        self._write(STORE_INFO_KEY, store_info.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def _read(self, key: str) -> tuple[bool, Any]:
        """Return ``(found, data)`` for one blob; ``found`` is False on any failure."""
        try:
            raw = self.storage.get_item(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("persisted_state_unreadable", key=key, error=str(e))
            return False, None
        if raw is None:
            return False, None

        try:
            validate_json_size(raw, self.max_blob_size, key)
            envelope = parse_json(raw)
            if not isinstance(envelope, dict) or "data" not in envelope:
                raise ValidationError(f"{key} is not a versioned envelope")
            version = envelope.get("schema_version")
            if version != SCHEMA_VERSION:
                raise ValidationError(f"{key} has unsupported schema version {version!r}")
            validate_json_depth(envelope["data"], self.max_depth)
        except (JSONParseError, ValidationError) as e:
            logger.warning("persisted_state_invalid", key=key, error=str(e))
            return False, None
        return True, envelope["data"]

    def _build_page(self, key: str, data: Any) -> Page | None:
        result = validate_page_data(data, self.max_depth)
        if isinstance(result, Failure):
            logger.warning("persisted_state_invalid", key=key, error=result.failure().message)
            return None
        try:
            return Page.model_validate(data)
        except ModelValidationError as e:
            logger.warning("persisted_state_invalid", key=key, error=str(e))
            return None

    def load(self) -> dict[str, Any]:
        """
        Load whatever was persisted.

        Returns:
            Mapping holding only the parts that loaded: ``pages``
            (list[Page]), ``current_page`` (Page or None) and
            ``store_info`` (StoreInfo)
        """
        with LogContext(storage=type(self.storage).__name__):
            loaded = self._load_parts()
        logger.info("pages_loaded", parts=sorted(loaded))
        return loaded

    def _load_parts(self) -> dict[str, Any]:
        loaded: dict[str, Any] = {}

        found, data = self._read(PAGES_KEY)
        if found:
            if isinstance(data, list):
                pages = [self._build_page(PAGES_KEY, item) for item in data]
                loaded["pages"] = [page for page in pages if page is not None]
            else:
                logger.warning("persisted_state_invalid", key=PAGES_KEY, error="expected a list")

        found, data = self._read(CURRENT_PAGE_KEY)
        if found:
            if data is None:
                loaded["current_page"] = None
            else:
                page = self._build_page(CURRENT_PAGE_KEY, data)
                if page is not None:
                    loaded["current_page"] = page

        found, data = self._read(STORE_INFO_KEY)
        if found:
            try:
                loaded["store_info"] = StoreInfo.model_validate(data)
            except ModelValidationError as e:
                logger.warning("persisted_state_invalid", key=STORE_INFO_KEY, error=str(e))

        return loaded


__all__ = ["PagePersistence", "PAGES_KEY", "CURRENT_PAGE_KEY", "STORE_INFO_KEY", "SCHEMA_VERSION"]

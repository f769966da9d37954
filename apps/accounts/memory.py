"""
Key-value runtime settings backed by the ``options`` table.

Keys are dotted strings such as ``site.name`` or ``email.queue``. Values are
stored as JSON so booleans and numbers come back with their type intact.
"""

from typing import Any, Optional

import structlog

from .models import Option

logger = structlog.get_logger(__name__)


class MemoryStore:
    """Read-through cache over Option rows.

    Rows are loaded on first access and kept for the lifetime of the
    instance, so create one store per request.
    """

    def __init__(self):
        self._items: Optional[dict] = None

    def _load(self) -> dict:
        if self._items is None:
            self._items = dict(Option.objects.values_list('name', 'value'))
        return self._items

    def get(self, key: str, default: Any = None) -> Any:
        items = self._load()
        if key not in items or items[key] is None:
            return default
        return items[key]

    def has(self, key: str) -> bool:
        return key in self._load()

    def put(self, key: str, value: Any) -> None:
        Option.objects.update_or_create(name=key, defaults={'value': value})
        self._load()[key] = value
        logger.debug("memory_put", key=key)

    def forget(self, key: str) -> None:
        Option.objects.filter(name=key).delete()
        self._load().pop(key, None)
        logger.debug("memory_forget", key=key)

    def all(self) -> dict:
        return dict(self._load())

"""Item CRUD operations on Directus collections."""

import logging
from collections.abc import Mapping
from typing import Any

from .client import DirectusClient
from .consts import ITEMS_URL_PATH
from .models import Method

logger = logging.getLogger("directus-sdk.items")

ItemId = int | str


class ItemsService:
    """Verb-specific wrappers over DirectusClient.make_call for /items.

    Every operation returns the response envelope, header-stripped when the
    configuration asks for it.
    """

    def __init__(self, client: DirectusClient):
        self.client = client

    def get_items(
        self, collection: str, data: Mapping[str, Any] | ItemId | None = None
    ) -> dict[str, Any]:
        """Read items of a collection.

        Args:
            collection: Collection name.
            data: A query mapping (filter, fields, limit, ...) sent as query
                parameters, a single item id, or None for the whole collection.
        """
        path = self._path(collection)
        if isinstance(data, Mapping):
            response = self.client.make_call(path, data, Method.GET)
        elif data is not None and not isinstance(data, bool):
            response = self.client.make_call(self._path(collection, data))
        else:
            response = self.client.make_call(path)
        return self.client.strip_headers(response)

    def create_items(self, collection: str, fields: Any) -> dict[str, Any]:
        """Create one item (a mapping) or several (a list of mappings)."""
        response = self.client.make_call(self._path(collection), fields, Method.POST)
        return self.client.strip_headers(response)

    def update_items(
        self, collection: str, fields: Any, item_id: ItemId | None = None
    ) -> dict[str, Any]:
        """Update one item by id, or send a bulk update when no id is given."""
        if item_id is not None:
            path = self._path(collection, item_id)
        else:
            path = self._path(collection)
        response = self.client.make_call(path, fields, Method.PATCH)
        return self.client.strip_headers(response)

    def delete_items(
        self, collection: str, item_id: ItemId | list | tuple | set
    ) -> dict[str, Any]:
        """Delete one item by id, or several when given a collection of ids."""
        if isinstance(item_id, (list, tuple, set, frozenset)):
            logger.debug(f"Bulk delete of {len(item_id)} items from {collection}")
            response = self.client.make_call(
                self._path(collection), list(item_id), Method.DELETE
            )
        else:
            response = self.client.make_call(
                self._path(collection, item_id), None, Method.DELETE
            )
        return self.client.strip_headers(response)

    @staticmethod
    def _path(collection: str, item_id: ItemId | None = None) -> str:
        if item_id is None:
            return f"{ITEMS_URL_PATH}/{collection}"
        return f"{ITEMS_URL_PATH}/{collection}/{item_id}"

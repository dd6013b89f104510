import hashlib
import json
from typing import Any, Optional

from azure.core.credentials import TokenCredential
from azure.cosmos import CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from ..config.logging_config import configure_logging
from .base import Storage

_LOGGER = configure_logging(__name__)

MAX_KEY_LENGTH = 255
_ILLEGAL_KEY_CHARS = ("\\", "?", "/", "#", "\t", "\n", "\r", "*")


def escape_key(key: str) -> str:
    """
    Map an arbitrary storage key onto a legal Cosmos DB item id.

    Illegal characters become ``*`` followed by their hex code. Ids over the
    length limit are cut short and suffixed with a sha256 of the escaped key
    so that distinct long keys stay distinct.
    """
    escaped = "".join(f"*{ord(ch):02x}" if ch in _ILLEGAL_KEY_CHARS else ch for ch in key)
    if len(escaped) > MAX_KEY_LENGTH:
        digest = hashlib.sha256(escaped.encode("utf-8")).hexdigest()
        escaped = escaped[: MAX_KEY_LENGTH - len(digest)] + digest
    return escaped


class CosmosPartitionedStorage(Storage):
    kind = "cosmos"

    def __init__(self, endpoint: str, database_id: str, container_id: str, credential: TokenCredential) -> None:
        self.endpoint = endpoint
        self.database_id = database_id
        self.container_id = container_id
        # CosmosClient contacts the account on construction; failures abort startup.
        self.client = CosmosClient(endpoint, credential=credential)
        self.database = self.client.get_database_client(database_id)
        self.container = self.database.get_container_client(container_id)

    def put(self, key: str, obj: Any) -> None:
        item_id = escape_key(key)
        # Round-trip through json so only plain documents reach the service.
        document = json.loads(json.dumps(obj))
        self.container.upsert_item({"id": item_id, "realId": key, "document": document})

    def get(self, key: str) -> Optional[Any]:
        item_id = escape_key(key)
        try:
            item = self.container.read_item(item=item_id, partition_key=item_id)
        except CosmosResourceNotFoundError:
            return None
        return item.get("document")

    def delete(self, key: str) -> None:
        item_id = escape_key(key)
        try:
            self.container.delete_item(item=item_id, partition_key=item_id)
        except CosmosResourceNotFoundError:
            _LOGGER.debug("cosmos delete of missing item", extra={"item_id": item_id})

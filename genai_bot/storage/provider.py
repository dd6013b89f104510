from azure.core.credentials import TokenCredential

from ..config.config import Configuration
from ..config.logging_config import configure_logging
from .base import Storage
from .cosmos_store import CosmosPartitionedStorage
from .memory_store import MemoryStorage

_LOGGER = configure_logging(__name__)

COSMOS_ENDPOINT_KEY = "AZURE_COSMOSDB_ENDPOINT"
COSMOS_DATABASE_KEY = "AZURE_COSMOSDB_DATABASE_ID"
COSMOS_CONTAINER_KEY = "AZURE_COSMOSDB_CONTAINER_ID"


def uses_durable_storage(config: Configuration) -> bool:
	return bool(config.get(COSMOS_ENDPOINT_KEY))


def select_storage(config: Configuration, credential: TokenCredential) -> Storage:
	# Cosmos iff the endpoint is set and non-empty; there is no runtime fallback.
	if uses_durable_storage(config):
		endpoint = config.require(COSMOS_ENDPOINT_KEY)
		database_id = config.require(COSMOS_DATABASE_KEY)
		container_id = config.require(COSMOS_CONTAINER_KEY)
		store = CosmosPartitionedStorage(endpoint, database_id, container_id, credential)
		_LOGGER.info("Using CosmosPartitionedStorage", extra={"database": database_id, "container": container_id})
		return store
	_LOGGER.info("Using MemoryStorage")
	return MemoryStorage()

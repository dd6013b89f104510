from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.config import Configuration
from ..config.logging_config import configure_logging

_LOGGER = configure_logging(__name__)

SEARCH_ENDPOINT_KEY = "AZURE_SEARCH_API_ENDPOINT"
SEARCH_INDEX_KEY = "AZURE_SEARCH_INDEX"
INSTRUCTIONS_KEY = "LLM_INSTRUCTIONS"

SYSTEM_MANAGED_IDENTITY = "system_assigned_managed_identity"


@dataclass(frozen=True)
class SearchDataSource:
	endpoint: str
	index_name: Optional[str]
	role_information: Optional[str]
	authentication: str = SYSTEM_MANAGED_IDENTITY

	def to_data_source(self) -> Dict[str, Any]:
		parameters: Dict[str, Any] = {
			"endpoint": self.endpoint,
			"index_name": self.index_name,
			"authentication": {"type": self.authentication},
		}
		if self.role_information is not None:
			parameters["role_information"] = self.role_information
		return {"type": "azure_search", "parameters": parameters}


def build_search_source(config: Configuration) -> Optional[SearchDataSource]:
	# Disabled only when the endpoint equals "" (unset keys read as "" too).
	endpoint = config.get_or_default(SEARCH_ENDPOINT_KEY, "")
	if endpoint == "":
		_LOGGER.info("Search augmentation disabled")
		return None
	source = SearchDataSource(
		endpoint=endpoint,
		index_name=config.get(SEARCH_INDEX_KEY),
		role_information=config.get(INSTRUCTIONS_KEY),
	)
	_LOGGER.info("Search augmentation enabled", extra={"index": source.index_name})
	return source

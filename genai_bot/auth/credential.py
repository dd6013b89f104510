from typing import Callable, Optional

from azure.core.credentials import TokenCredential
from azure.identity import DefaultAzureCredential, get_bearer_token_provider

from ..config.logging_config import configure_logging

_LOGGER = configure_logging(__name__)

COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


def build_credential(client_id: Optional[str] = None) -> TokenCredential:
	# Token acquisition is lazy; an unreachable identity endpoint fails at first use.
	if client_id:
		_LOGGER.info("Using user-assigned managed identity", extra={"client_id": client_id})
		return DefaultAzureCredential(managed_identity_client_id=client_id)
	return DefaultAzureCredential()


def bearer_token_provider(credential: TokenCredential, scope: str = COGNITIVE_SERVICES_SCOPE) -> Callable[[], str]:
	return get_bearer_token_provider(credential, scope)

from azure.core.credentials import TokenCredential
from openai import AzureOpenAI

from ..auth.credential import bearer_token_provider
from ..config.config import Configuration
from ..config.logging_config import configure_logging

_LOGGER = configure_logging(__name__)

OPENAI_ENDPOINT_KEY = "AZURE_OPENAI_API_ENDPOINT"
OPENAI_API_VERSION_KEY = "AZURE_OPENAI_API_VERSION"
OPENAI_DEPLOYMENT_KEY = "AZURE_OPENAI_DEPLOYMENT_NAME"
DEFAULT_API_VERSION = "2024-10-21"
DEFAULT_DEPLOYMENT = "gpt-4o"


def build_openai_client(config: Configuration, credential: TokenCredential) -> AzureOpenAI:
	endpoint = config.require(OPENAI_ENDPOINT_KEY)
	api_version = config.get_or_default(OPENAI_API_VERSION_KEY, DEFAULT_API_VERSION)
	_LOGGER.info("Building Azure OpenAI client", extra={"endpoint": endpoint, "api_version": api_version})
	return AzureOpenAI(
		azure_endpoint=endpoint,
		api_version=api_version,
		azure_ad_token_provider=bearer_token_provider(credential),
	)


def deployment_name(config: Configuration) -> str:
	return config.get_or_default(OPENAI_DEPLOYMENT_KEY, DEFAULT_DEPLOYMENT) or DEFAULT_DEPLOYMENT

from typing import Sequence

from azure.core.credentials import TokenCredential
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from ..auth.credential import bearer_token_provider
from ..config.config import Configuration
from ..config.logging_config import configure_logging
from .clients import DEFAULT_API_VERSION, OPENAI_API_VERSION_KEY, OPENAI_ENDPOINT_KEY, deployment_name

_LOGGER = configure_logging(__name__)

PHI_ENDPOINT_KEY = "AZURE_AI_PHI_DEPLOYMENT_ENDPOINT"
PHI_KEY_KEY = "AZURE_AI_PHI_DEPLOYMENT_KEY"
PHI_MODEL_KEY = "PHI_MODEL"
DEFAULT_PHI_MODEL = "Phi-3.5-mini-instruct"


class ChatModelFactory:
	def __init__(self, config: Configuration, credential: TokenCredential) -> None:
		self.config = config
		self.credential = credential

	def build_azure_chat(self) -> BaseChatModel:
		endpoint = self.config.require(OPENAI_ENDPOINT_KEY)
		return AzureChatOpenAI(
			azure_endpoint=endpoint,
			azure_deployment=deployment_name(self.config),
			api_version=self.config.get_or_default(OPENAI_API_VERSION_KEY, DEFAULT_API_VERSION),
			azure_ad_token_provider=bearer_token_provider(self.credential),
			temperature=0,
		)

	def build_phi_chat(self) -> BaseChatModel:
		# Key-authenticated; the shared credential is not used for this deployment.
		endpoint = self.config.require(PHI_ENDPOINT_KEY)
		api_key = self.config.require(PHI_KEY_KEY)
		model = self.config.get_or_default(PHI_MODEL_KEY, DEFAULT_PHI_MODEL)
		_LOGGER.info("Building Phi chat model", extra={"endpoint": endpoint, "model": model})
		return ChatOpenAI(model=model, base_url=endpoint, api_key=api_key, temperature=0)


class LLMClient:
	def __init__(self, model: BaseChatModel) -> None:
		self.model = model

	def generate(self, messages: Sequence[BaseMessage]) -> str:
		response = self.model.invoke(list(messages))
		return self._extract_text(response)

	@staticmethod
	def _extract_text(response: BaseMessage) -> str:
		# Chat models answer with an AIMessage whose content is a string or a list of content blocks.
		content = response.content
		if isinstance(content, str):
			return content
		return "".join(block if isinstance(block, str) else block.get("text", "") for block in content)

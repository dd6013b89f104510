from dataclasses import dataclass
from typing import Callable, Dict, Optional

from azure.core.credentials import TokenCredential
from openai import AzureOpenAI

from ..config.config import Configuration
from ..config.logging_config import configure_logging
from ..inference.clients import deployment_name
from ..inference.llm import ChatModelFactory, LLMClient
from ..search.augmentation import INSTRUCTIONS_KEY, SearchDataSource
from ..state.state import ConversationState, UserState
from .assistant import ASSISTANT_ID_KEY, AssistantEngine
from .base import Engine
from .chat_completions import ChatCompletionsEngine
from .kind import EngineKind, parse_engine_kind
from .phi import PhiEngine
from .semantic_kernel import SemanticKernelEngine

_LOGGER = configure_logging(__name__)


@dataclass(frozen=True)
class EngineDependencies:
	config: Configuration
	credential: TokenCredential
	openai_client: AzureOpenAI
	user_state: UserState
	conversation_state: ConversationState
	search_source: Optional[SearchDataSource] = None

	@property
	def instructions(self) -> Optional[str]:
		return self.config.get(INSTRUCTIONS_KEY)


def _chat_completions(deps: EngineDependencies) -> Engine:
	return ChatCompletionsEngine(
		client=deps.openai_client,
		deployment=deployment_name(deps.config),
		user_state=deps.user_state,
		conversation_state=deps.conversation_state,
		instructions=deps.instructions,
		search_source=deps.search_source,
	)


def _assistant(deps: EngineDependencies) -> Engine:
	return AssistantEngine(
		client=deps.openai_client,
		deployment=deployment_name(deps.config),
		user_state=deps.user_state,
		conversation_state=deps.conversation_state,
		instructions=deps.instructions,
		assistant_id=deps.config.get(ASSISTANT_ID_KEY),
	)


def _semantic_kernel(deps: EngineDependencies) -> Engine:
	model = ChatModelFactory(deps.config, deps.credential).build_azure_chat()
	return SemanticKernelEngine(
		llm=LLMClient(model),
		user_state=deps.user_state,
		conversation_state=deps.conversation_state,
		instructions=deps.instructions,
	)


def _phi(deps: EngineDependencies) -> Engine:
	model = ChatModelFactory(deps.config, deps.credential).build_phi_chat()
	return PhiEngine(
		llm=LLMClient(model),
		user_state=deps.user_state,
		conversation_state=deps.conversation_state,
		instructions=deps.instructions,
	)


ENGINE_BUILDERS: Dict[EngineKind, Callable[[EngineDependencies], Engine]] = {
	EngineKind.CHAT_COMPLETIONS: _chat_completions,
	EngineKind.ASSISTANT: _assistant,
	EngineKind.SEMANTIC_KERNEL: _semantic_kernel,
	EngineKind.PHI: _phi,
}


def construct_engine(kind: EngineKind, deps: EngineDependencies) -> Engine:
	engine = ENGINE_BUILDERS[kind](deps)
	_LOGGER.info("Engine selected", extra={"engine": kind.value, "search": deps.search_source is not None})
	return engine


def select_engine(kind: Optional[str], deps: EngineDependencies) -> Engine:
	# Parse before building anything so a rejected value constructs nothing.
	return construct_engine(parse_engine_kind(kind), deps)

from .kind import EngineKind
from .llm_chat import LLMChatEngine


class SemanticKernelEngine(LLMChatEngine):
	kind = EngineKind.SEMANTIC_KERNEL.value

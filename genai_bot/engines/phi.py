from .kind import EngineKind
from .llm_chat import LLMChatEngine


class PhiEngine(LLMChatEngine):
	kind = EngineKind.PHI.value

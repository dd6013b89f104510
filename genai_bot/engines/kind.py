from enum import Enum
from typing import Optional

from ..errors import InvalidSelection, UnsupportedSelection

ENGINE_SELECTOR_KEY = "GEN_AI_IMPLEMENTATION"


class EngineKind(str, Enum):
	CHAT_COMPLETIONS = "chat-completions"
	ASSISTANT = "assistant"
	SEMANTIC_KERNEL = "semantic-kernel"
	PHI = "phi"


WITHDRAWN_ENGINES = {
	"langchain": "Langchain is not supported in this version.",
}


def parse_engine_kind(value: Optional[str]) -> EngineKind:
	"""
	Resolve the configured selector string to an EngineKind.

	Matching is exact and case-sensitive. Withdrawn values raise
	UnsupportedSelection; anything else outside the enum, including an
	empty or missing value, raises InvalidSelection.
	"""
	if value in WITHDRAWN_ENGINES:
		raise UnsupportedSelection(WITHDRAWN_ENGINES[value], key=ENGINE_SELECTOR_KEY, value=value)
	for kind in EngineKind:
		if kind.value == value:
			return kind
	raise InvalidSelection(f"Invalid engine type: {value!r}", key=ENGINE_SELECTOR_KEY, value=value)

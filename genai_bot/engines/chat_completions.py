from typing import Any, Dict, List, Optional

from openai import AzureOpenAI

from ..search.augmentation import SearchDataSource
from ..state.state import ConversationState, UserState
from .base import Engine, Turn
from .kind import EngineKind


class ChatCompletionsEngine(Engine):
	kind = EngineKind.CHAT_COMPLETIONS.value

	def __init__(
		self,
		client: AzureOpenAI,
		deployment: str,
		user_state: UserState,
		conversation_state: ConversationState,
		instructions: Optional[str] = None,
		search_source: Optional[SearchDataSource] = None,
	) -> None:
		super().__init__(user_state, conversation_state, instructions)
		self.client = client
		self.deployment = deployment
		self.search_source = search_source

	def build_messages(self, turn: Turn) -> List[Dict[str, Any]]:
		messages: List[Dict[str, Any]] = []
		# With a search source the instructions travel as role_information instead.
		if self.instructions and self.search_source is None:
			messages.append({"role": "system", "content": self.instructions})
		messages.extend(self.load_history(turn))
		messages.append({"role": "user", "content": turn.text})
		return messages

	def reply(self, turn: Turn) -> str:
		kwargs: Dict[str, Any] = {}
		if self.search_source is not None:
			kwargs["extra_body"] = {"data_sources": [self.search_source.to_data_source()]}
		completion = self.client.chat.completions.create(
			model=self.deployment,
			messages=self.build_messages(turn),
			**kwargs,
		)
		answer = completion.choices[0].message.content or ""
		self.record_exchange(turn, answer)
		return answer

from typing import List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..inference.llm import LLMClient
from ..state.state import ConversationState, UserState
from .base import Engine, Turn


class LLMChatEngine(Engine):
	"""Engine that drives a LangChain chat model through LLMClient."""

	def __init__(
		self,
		llm: LLMClient,
		user_state: UserState,
		conversation_state: ConversationState,
		instructions: Optional[str] = None,
	) -> None:
		super().__init__(user_state, conversation_state, instructions)
		self.llm = llm

	def build_messages(self, turn: Turn) -> List[BaseMessage]:
		messages: List[BaseMessage] = []
		if self.instructions:
			messages.append(SystemMessage(content=self.instructions))
		for item in self.load_history(turn):
			if item.get("role") == "assistant":
				messages.append(AIMessage(content=item.get("content", "")))
			else:
				messages.append(HumanMessage(content=item.get("content", "")))
		messages.append(HumanMessage(content=turn.text))
		return messages

	def reply(self, turn: Turn) -> str:
		answer = self.llm.generate(self.build_messages(turn))
		self.record_exchange(turn, answer)
		return answer

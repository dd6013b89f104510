from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..state.state import ConversationState, UserState

MAX_HISTORY_MESSAGES = 20


@dataclass(frozen=True)
class Turn:
	channel_id: str
	conversation_id: str
	user_id: str
	text: str


class Engine(ABC):
	kind: str = ""

	def __init__(
		self,
		user_state: UserState,
		conversation_state: ConversationState,
		instructions: Optional[str] = None,
	) -> None:
		self.user_state = user_state
		self.conversation_state = conversation_state
		self.instructions = instructions

	@abstractmethod
	def reply(self, turn: Turn) -> str:
		...

	def load_history(self, turn: Turn) -> List[Dict[str, Any]]:
		state = self.conversation_state.load(turn.channel_id, turn.conversation_id)
		history = state.get("history")
		return list(history) if isinstance(history, list) else []

	def remember_user(self, turn: Turn) -> None:
		profile = self.user_state.load(turn.channel_id, turn.user_id)
		profile["turns"] = int(profile.get("turns", 0)) + 1
		profile["last_conversation_id"] = turn.conversation_id
		self.user_state.save(turn.channel_id, turn.user_id, profile)

	def record_exchange(self, turn: Turn, answer: str) -> None:
		state = self.conversation_state.load(turn.channel_id, turn.conversation_id)
		history = state.get("history") if isinstance(state.get("history"), list) else []
		history.append({"role": "user", "content": turn.text})
		history.append({"role": "assistant", "content": answer})
		state["history"] = history[-MAX_HISTORY_MESSAGES:]
		self.conversation_state.save(turn.channel_id, turn.conversation_id, state)
		self.remember_user(turn)

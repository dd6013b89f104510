from typing import Any, Dict

from ..storage.base import Storage


class BotState:
	"""Scoped view over a shared storage backend."""

	scope = ""
	segment = ""

	def __init__(self, storage: Storage) -> None:
		self.storage = storage

	def storage_key(self, channel_id: str, owner_id: str) -> str:
		if not channel_id or not owner_id:
			raise ValueError(f"{self.scope} state needs both channel_id and owner id")
		return f"{channel_id}/{self.segment}/{owner_id}"

	def load(self, channel_id: str, owner_id: str) -> Dict[str, Any]:
		data = self.storage.get(self.storage_key(channel_id, owner_id))
		return dict(data) if isinstance(data, dict) else {}

	def save(self, channel_id: str, owner_id: str, state: Dict[str, Any]) -> None:
		self.storage.put(self.storage_key(channel_id, owner_id), state)

	def clear(self, channel_id: str, owner_id: str) -> None:
		self.storage.delete(self.storage_key(channel_id, owner_id))


class UserState(BotState):
	scope = "user"
	segment = "users"


class ConversationState(BotState):
	scope = "conversation"
	segment = "conversations"


def build_user_state(storage: Storage) -> UserState:
	return UserState(storage)


def build_conversation_state(storage: Storage) -> ConversationState:
	return ConversationState(storage)

import threading
from typing import Optional

from openai import AzureOpenAI

from ..config.logging_config import configure_logging
from ..state.state import ConversationState, UserState
from .base import Engine, Turn
from .kind import EngineKind

_LOGGER = configure_logging(__name__)

ASSISTANT_ID_KEY = "AZURE_OPENAI_ASSISTANT_ID"


class AssistantEngine(Engine):
	"""
	Engine backed by the Assistants API.

	Each conversation maps to one server-side thread whose id is kept in
	conversation state. The assistant itself is either configured up front or
	created once, on the first turn, from the deployment and instructions.
	"""

	kind = EngineKind.ASSISTANT.value

	def __init__(
		self,
		client: AzureOpenAI,
		deployment: str,
		user_state: UserState,
		conversation_state: ConversationState,
		instructions: Optional[str] = None,
		assistant_id: Optional[str] = None,
	) -> None:
		super().__init__(user_state, conversation_state, instructions)
		self.client = client
		self.deployment = deployment
		self.assistant_id = assistant_id or None
		self._lock = threading.Lock()

	def ensure_assistant(self) -> str:
		with self._lock:
			if self.assistant_id is None:
				assistant = self.client.beta.assistants.create(model=self.deployment, instructions=self.instructions)
				self.assistant_id = assistant.id
				_LOGGER.info("Created assistant", extra={"assistant_id": assistant.id})
			return self.assistant_id

	def ensure_thread(self, turn: Turn) -> str:
		state = self.conversation_state.load(turn.channel_id, turn.conversation_id)
		thread_id = state.get("thread_id")
		if thread_id:
			return thread_id
		thread_id = self.client.beta.threads.create().id
		state["thread_id"] = thread_id
		self.conversation_state.save(turn.channel_id, turn.conversation_id, state)
		return thread_id

	def reply(self, turn: Turn) -> str:
		assistant_id = self.ensure_assistant()
		thread_id = self.ensure_thread(turn)
		self.client.beta.threads.messages.create(thread_id=thread_id, role="user", content=turn.text)
		run = self.client.beta.threads.runs.create_and_poll(thread_id=thread_id, assistant_id=assistant_id)
		if run.status != "completed":
			raise RuntimeError(f"Assistant run {run.id} ended with status {run.status}")
		self.remember_user(turn)
		page = self.client.beta.threads.messages.list(thread_id=thread_id, order="desc", limit=1)
		parts = []
		for message in page.data:
			for block in message.content:
				if getattr(block, "type", None) == "text":
					parts.append(block.text.value)
		return "\n".join(parts)

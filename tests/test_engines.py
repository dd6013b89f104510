from types import SimpleNamespace
from typing import Any, List

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from genai_bot.engines.assistant import AssistantEngine
from genai_bot.engines.base import MAX_HISTORY_MESSAGES, Turn
from genai_bot.engines.chat_completions import ChatCompletionsEngine
from genai_bot.engines.phi import PhiEngine
from genai_bot.engines.semantic_kernel import SemanticKernelEngine
from genai_bot.inference.llm import LLMClient
from genai_bot.search.augmentation import SearchDataSource
from genai_bot.state.state import build_conversation_state, build_user_state
from genai_bot.storage.memory_store import MemoryStorage

TURN = Turn(channel_id="webchat", conversation_id="c1", user_id="u1", text="hello")


@pytest.fixture
def states():
	storage = MemoryStorage()
	return build_user_state(storage), build_conversation_state(storage)


class FakeModel:
	def __init__(self, resp: Any) -> None:
		self._resp = resp
		self.calls: List[list] = []

	def invoke(self, messages):
		self.calls.append(messages)
		return self._resp


def test_chat_completions_sends_history_and_instructions(states, fake_openai):
	user_state, conversation_state = states
	engine = ChatCompletionsEngine(fake_openai, "gpt-4o", user_state, conversation_state, instructions="be brief")
	assert engine.reply(TURN) == "answer"
	engine.reply(Turn("webchat", "c1", "u1", "again"))
	call = fake_openai.chat.completions.calls[-1]
	assert call["model"] == "gpt-4o"
	assert call["messages"] == [
		{"role": "system", "content": "be brief"},
		{"role": "user", "content": "hello"},
		{"role": "assistant", "content": "answer"},
		{"role": "user", "content": "again"},
	]
	assert "extra_body" not in call


def test_chat_completions_attaches_search_source(states, fake_openai):
	user_state, conversation_state = states
	source = SearchDataSource(endpoint="https://search.example", index_name="docs", role_information="be brief")
	engine = ChatCompletionsEngine(
		fake_openai, "gpt-4o", user_state, conversation_state, instructions="be brief", search_source=source
	)
	engine.reply(TURN)
	call = fake_openai.chat.completions.calls[-1]
	assert call["extra_body"] == {"data_sources": [source.to_data_source()]}
	assert call["messages"] == [{"role": "user", "content": "hello"}]


def test_history_is_bounded(states, fake_openai):
	user_state, conversation_state = states
	engine = ChatCompletionsEngine(fake_openai, "gpt-4o", user_state, conversation_state)
	for i in range(MAX_HISTORY_MESSAGES):
		engine.reply(Turn("webchat", "c1", "u1", f"m{i}"))
	history = conversation_state.load("webchat", "c1")["history"]
	assert len(history) == MAX_HISTORY_MESSAGES
	assert history[-2] == {"role": "user", "content": f"m{MAX_HISTORY_MESSAGES - 1}"}


class FakeAssistantsClient:
	def __init__(self, status: str = "completed") -> None:
		self.created_assistants: List[dict] = []
		self.created_threads = 0
		self.posted: List[tuple] = []
		self.status = status
		self.beta = SimpleNamespace(
			assistants=SimpleNamespace(create=self._create_assistant),
			threads=SimpleNamespace(
				create=self._create_thread,
				messages=SimpleNamespace(create=self._post_message, list=self._list_messages),
				runs=SimpleNamespace(create_and_poll=self._run),
			),
		)

	def _create_assistant(self, **kwargs):
		self.created_assistants.append(kwargs)
		return SimpleNamespace(id=f"asst_{len(self.created_assistants)}")

	def _create_thread(self):
		self.created_threads += 1
		return SimpleNamespace(id=f"thread_{self.created_threads}")

	def _post_message(self, thread_id, role, content):
		self.posted.append((thread_id, role, content))

	def _run(self, thread_id, assistant_id):
		return SimpleNamespace(id="run_1", status=self.status)

	def _list_messages(self, thread_id, order, limit):
		block = SimpleNamespace(type="text", text=SimpleNamespace(value=f"reply on {thread_id}"))
		return SimpleNamespace(data=[SimpleNamespace(content=[block])])


def test_assistant_creates_assistant_once_and_reuses_thread(states):
	user_state, conversation_state = states
	client = FakeAssistantsClient()
	engine = AssistantEngine(client, "gpt-4o", user_state, conversation_state, instructions="be brief")
	assert engine.reply(TURN) == "reply on thread_1"
	assert engine.reply(TURN) == "reply on thread_1"
	assert client.created_assistants == [{"model": "gpt-4o", "instructions": "be brief"}]
	assert client.created_threads == 1
	assert conversation_state.load("webchat", "c1")["thread_id"] == "thread_1"
	assert client.posted[0] == ("thread_1", "user", "hello")


def test_assistant_uses_configured_id(states):
	user_state, conversation_state = states
	client = FakeAssistantsClient()
	engine = AssistantEngine(client, "gpt-4o", user_state, conversation_state, assistant_id="asst_cfg")
	engine.reply(TURN)
	assert client.created_assistants == []


def test_assistant_failed_run_raises(states):
	user_state, conversation_state = states
	engine = AssistantEngine(FakeAssistantsClient(status="failed"), "gpt-4o", user_state, conversation_state)
	with pytest.raises(RuntimeError):
		engine.reply(TURN)


@pytest.mark.parametrize("engine_cls", [SemanticKernelEngine, PhiEngine])
def test_llm_chat_engines_build_langchain_messages(states, engine_cls):
	user_state, conversation_state = states
	model = FakeModel(AIMessage(content="hi there"))
	engine = engine_cls(LLMClient(model), user_state, conversation_state, instructions="be brief")
	assert engine.reply(TURN) == "hi there"
	engine.reply(Turn("webchat", "c1", "u1", "again"))
	sent = model.calls[-1]
	assert [type(m) for m in sent] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
	assert sent[-1].content == "again"


def test_llm_client_extracts_text_from_ai_messages():
	assert LLMClient(FakeModel(AIMessage(content="plain"))).generate([]) == "plain"
	blocks = AIMessage(content=[{"type": "text", "text": "Hello, "}, "world", {"type": "image_url", "image_url": {"url": "x"}}])
	assert LLMClient(FakeModel(blocks)).generate([]) == "Hello, world"


def test_engines_keep_a_user_profile(states, fake_openai):
	user_state, conversation_state = states
	engine = ChatCompletionsEngine(fake_openai, "gpt-4o", user_state, conversation_state)
	engine.reply(TURN)
	engine.reply(Turn("webchat", "c2", "u1", "again"))
	assert user_state.load("webchat", "u1") == {"turns": 2, "last_conversation_id": "c2"}
	assert user_state.load("webchat", "u2") == {}


def test_assistant_keeps_a_user_profile(states):
	user_state, conversation_state = states
	engine = AssistantEngine(FakeAssistantsClient(), "gpt-4o", user_state, conversation_state)
	engine.reply(TURN)
	assert user_state.load("webchat", "u1") == {"turns": 1, "last_conversation_id": "c1"}

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from azure.cosmos.exceptions import CosmosResourceNotFoundError

# Ensure project root is on sys.path so `import genai_bot` works under pytest
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
	sys.path.insert(0, str(ROOT_DIR))

from genai_bot.config.config import Configuration


class FakeContainer:
	def __init__(self) -> None:
		self.items: Dict[str, Dict[str, Any]] = {}

	def upsert_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
		self.items[body["id"]] = body
		return body

	def read_item(self, item: str, partition_key: str) -> Dict[str, Any]:
		assert item == partition_key
		if item not in self.items:
			raise CosmosResourceNotFoundError(status_code=404, message="not found")
		return self.items[item]

	def delete_item(self, item: str, partition_key: str) -> None:
		if item not in self.items:
			raise CosmosResourceNotFoundError(status_code=404, message="not found")
		del self.items[item]


class FakeCosmosClient:
	instances: List["FakeCosmosClient"] = []

	def __init__(self, url: str, credential: Any = None) -> None:
		self.url = url
		self.credential = credential
		self.container = FakeContainer()
		self.database_id = None
		self.container_id = None
		FakeCosmosClient.instances.append(self)

	def get_database_client(self, database_id: str) -> "FakeCosmosClient":
		self.database_id = database_id
		return self

	def get_container_client(self, container_id: str) -> FakeContainer:
		self.container_id = container_id
		return self.container


class FakeCompletions:
	def __init__(self, answer: str = "answer") -> None:
		self.answer = answer
		self.calls: List[Dict[str, Any]] = []

	def create(self, **kwargs: Any) -> Any:
		self.calls.append(kwargs)
		message = SimpleNamespace(content=self.answer)
		return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
	def __init__(self, answer: str = "answer") -> None:
		self.chat = SimpleNamespace(completions=FakeCompletions(answer))


@pytest.fixture
def make_config():
	def _make(**values: str) -> Configuration:
		return Configuration(values)
	return _make


@pytest.fixture
def base_values() -> Dict[str, str]:
	return {
		"GEN_AI_IMPLEMENTATION": "chat-completions",
		"AZURE_OPENAI_API_ENDPOINT": "https://x.openai.azure.com",
	}


@pytest.fixture
def fake_cosmos(monkeypatch):
	from genai_bot.storage import cosmos_store

	FakeCosmosClient.instances = []
	monkeypatch.setattr(cosmos_store, "CosmosClient", FakeCosmosClient)
	return FakeCosmosClient


@pytest.fixture
def fake_openai():
	return FakeOpenAIClient()

from typing import Any, Optional, Protocol


class Storage(Protocol):
	kind: str

	def put(self, key: str, obj: Any) -> None: ...
	def get(self, key: str) -> Optional[Any]: ...
	def delete(self, key: str) -> None: ...

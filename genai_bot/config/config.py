import json
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import MissingRequiredConfiguration
from .logging_config import configure_logging

_LOGGER = configure_logging(__name__)

DEFAULT_SETTINGS_FILE = "appsettings.json"


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
	flat: dict[str, str] = {}
	for key, value in data.items():
		name = f"{prefix}{key}"
		if isinstance(value, Mapping):
			flat.update(_flatten(value, prefix=f"{name}:"))
		elif isinstance(value, list):
			flat.update(_flatten({str(i): item for i, item in enumerate(value)}, prefix=f"{name}:"))
		elif value is None:
			continue
		elif isinstance(value, bool):
			flat[name] = "true" if value else "false"
		else:
			flat[name] = str(value)
	return flat


def read_settings_file(path: str | Path) -> dict[str, str]:
	p = Path(path)
	if not p.exists():
		return {}
	with open(p, encoding="utf-8") as f:
		data = json.load(f)
	if not isinstance(data, dict):
		_LOGGER.warning("Settings file is not a JSON object, ignored", extra={"path": str(p)})
		return {}
	return _flatten(data)


class Configuration:
	"""Read-only key/value view over a settings file overlaid with the environment."""

	def __init__(self, values: Mapping[str, str]) -> None:
		self._values = MappingProxyType(dict(values))

	@property
	def values(self) -> Mapping[str, str]:
		return self._values

	def get(self, key: str) -> Optional[str]:
		return self._values.get(key)

	def get_or_default(self, key: str, default: str) -> str:
		value = self._values.get(key)
		return default if value is None else value

	def require(self, key: str) -> str:
		value = self._values.get(key)
		if value is None or value == "":
			raise MissingRequiredConfiguration(key)
		return value


def load_configuration(
	settings_path: str | Path | None = None,
	environ: Optional[Mapping[str, str]] = None,
) -> Configuration:
	env = os.environ if environ is None else environ
	path = settings_path or env.get("APPSETTINGS_PATH") or DEFAULT_SETTINGS_FILE
	merged = read_settings_file(path)
	merged.update(env)
	return Configuration(merged)

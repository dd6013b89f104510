from typing import Optional


class CompositionError(RuntimeError):
	"""Fatal startup error raised while assembling the service graph."""

	def __init__(self, message: str, key: Optional[str] = None, value: Optional[str] = None) -> None:
		super().__init__(message)
		self.key = key
		self.value = value


class MissingRequiredConfiguration(CompositionError):
	def __init__(self, key: str) -> None:
		super().__init__(f"Missing required configuration value: {key}", key=key)


class UnsupportedSelection(CompositionError):
	"""A known engine value that this version refuses to start with."""


class InvalidSelection(CompositionError):
	"""An engine value outside the supported set, including empty."""


class StartupOrderingViolation(CompositionError):
	"""Registry used out of order: resolve before sealing, register after it, or twice."""

from typing import Any, Dict, Tuple

from ..errors import StartupOrderingViolation


class ServiceRegistry:
    """
    Capability name -> singleton instance, filled once at startup.

    Registration is only allowed until ``seal()``; resolution only after it.
    Both misuses are programming errors and raise StartupOrderingViolation.
    """

    def __init__(self) -> None:
        self._services: Dict[str, Any] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, capability: str, instance: Any) -> None:
        if self._sealed:
            raise StartupOrderingViolation(f"registry is sealed; cannot register {capability}", key=capability)
        if capability in self._services:
            raise StartupOrderingViolation(f"{capability} is already registered", key=capability)
        self._services[capability] = instance

    def seal(self) -> "ServiceRegistry":
        self._sealed = True
        return self

    def resolve(self, capability: str) -> Any:
        if not self._sealed:
            raise StartupOrderingViolation(f"{capability} resolved before startup completed", key=capability)
        if capability not in self._services:
            raise KeyError(f"no service registered for {capability}")
        return self._services[capability]

    def capabilities(self) -> Tuple[str, ...]:
        return tuple(self._services)

    def __contains__(self, capability: object) -> bool:
        return capability in self._services

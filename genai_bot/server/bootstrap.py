from typing import Any, Dict

from ..auth.credential import build_credential
from ..config.config import Configuration
from ..config.logging_config import configure_logging
from ..engines.kind import ENGINE_SELECTOR_KEY
from ..engines.selector import EngineDependencies, select_engine
from ..inference.clients import build_openai_client
from ..search.augmentation import build_search_source
from ..state.state import build_conversation_state, build_user_state
from ..storage.provider import select_storage
from .registry import ServiceRegistry

_LOGGER = configure_logging(__name__)

CLIENT_ID_KEY = "MicrosoftAppId"


def build_services(cfg: Configuration) -> ServiceRegistry:
    # Order matters: credential before clients, storage before state,
    # state and search source before the engine that consumes them.
    credential = build_credential(cfg.get(CLIENT_ID_KEY))
    openai_client = build_openai_client(cfg, credential)

    storage = select_storage(cfg, credential)
    user_state = build_user_state(storage)
    conversation_state = build_conversation_state(storage)

    search_source = build_search_source(cfg)

    engine = select_engine(
        cfg.get(ENGINE_SELECTOR_KEY),
        EngineDependencies(
            config=cfg,
            credential=credential,
            openai_client=openai_client,
            user_state=user_state,
            conversation_state=conversation_state,
            search_source=search_source,
        ),
    )

    registry = ServiceRegistry()
    registry.register("configuration", cfg)
    registry.register("credential", credential)
    registry.register("openai_client", openai_client)
    registry.register("storage", storage)
    registry.register("user_state", user_state)
    registry.register("conversation_state", conversation_state)
    registry.register("search_source", search_source)
    registry.register("engine", engine)
    _LOGGER.info(
        "Service graph ready",
        extra={"engine": engine.kind, "storage": storage.kind, "search": search_source is not None},
    )
    return registry.seal()


def describe_services(registry: ServiceRegistry) -> Dict[str, Any]:
    return {
        "engine": registry.resolve("engine").kind,
        "storage": registry.resolve("storage").kind,
        "search": registry.resolve("search_source") is not None,
    }

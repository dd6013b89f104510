from dotenv import load_dotenv

load_dotenv()

from genai_bot.config.config import load_configuration
from genai_bot.server.bootstrap import build_services
from genai_bot.server.http import create_app

# Construct the ASGI app once; a composition error aborts the worker.
_cfg = load_configuration()
_registry = build_services(_cfg)
app = create_app(_registry)

import argparse
import json
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from genai_bot.config.config import load_configuration
from genai_bot.config.logging_config import configure_logging
from genai_bot.errors import CompositionError
from genai_bot.server.bootstrap import build_services, describe_services
from genai_bot.server.http import create_app

_LOGGER = configure_logging()


def cmd_serve(args: argparse.Namespace) -> None:
	cfg = load_configuration(args.settings)
	registry = build_services(cfg)
	app = create_app(registry)
	host = cfg.get_or_default("HOST", "0.0.0.0")
	port = int(cfg.get_or_default("PORT", "3978") or "3978")
	uvicorn.run(app, host=host, port=port)


def cmd_show_config(args: argparse.Namespace) -> None:
	cfg = load_configuration(args.settings)
	registry = build_services(cfg)
	print(json.dumps(describe_services(registry), indent=2))


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Generative AI bot service")
	parser.add_argument("--settings", help="Path to the JSON settings file (default: appsettings.json)")
	sub = parser.add_subparsers(dest="command", required=True)

	p_srv = sub.add_parser("serve", help="Build the service graph and run the HTTP server")
	p_srv.set_defaults(func=cmd_serve)

	p_show = sub.add_parser("show-config", help="Build the service graph and print the selected backends")
	p_show.set_defaults(func=cmd_show_config)
	return parser


def main() -> None:
	parser = build_arg_parser()
	args = parser.parse_args()
	try:
		args.func(args)
	except CompositionError as exc:
		_LOGGER.critical("Startup aborted: %s", exc)
		sys.exit(1)


if __name__ == "__main__":
	main()

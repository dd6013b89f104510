import logging
import os
from typing import Optional


def configure_logging(name: Optional[str] = None) -> logging.Logger:
	level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
	logging.basicConfig(level=level_name, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
	return logging.getLogger(name)

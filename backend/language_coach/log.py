"""Structured logging for the language coach service.

Outputs JSON-lines by default. LOG_LEVEL controls verbosity and
LOG_FORMAT=text switches to human-readable output.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

from .settings import Settings

ROOT_LOGGER = "language_coach"

_CONTEXT_KEYS = ("operation", "component", "detail", "meta")
# Request middleware fields, grouped under "http".
_HTTP_KEYS = {
	"request_id": "requestId",
	"method": "method",
	"path": "path",
	"status_code": "status",
	"duration_ms": "durationMs",
}


class JSONFormatter(logging.Formatter):
	"""One JSON object per record.

	Service context (operation, component, meta) stays top level; request
	fields are nested under ``http`` and exceptions under ``error``.
	"""

	def format(self, record: logging.LogRecord) -> str:
		entry: dict[str, Any] = {
			"time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
			"level": record.levelname.lower(),
			"logger": record.name,
			"message": record.getMessage(),
		}
		for key in _CONTEXT_KEYS:
			value = getattr(record, key, None)
			if value is not None:
				entry[key] = value
		http = {
			wire: getattr(record, attr)
			for attr, wire in _HTTP_KEYS.items()
			if getattr(record, attr, None) is not None
		}
		if http:
			entry["http"] = http
		if record.exc_info and record.exc_info[1]:
			err = record.exc_info[1]
			entry["error"] = {"type": type(err).__name__, "message": str(err)}
			if err.__cause__ is not None:
				entry["error"]["cause"] = type(err.__cause__).__name__
		return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(config: Settings) -> logging.Logger:
	logger = logging.getLogger(ROOT_LOGGER)
	logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	handler = logging.StreamHandler(sys.stderr)
	if config.log_format == "text":
		handler.setFormatter(logging.Formatter(
			"%(asctime)s [%(levelname)s] %(name)s: %(message)s",
			datefmt="%H:%M:%S",
		))
	else:
		handler.setFormatter(JSONFormatter())
	logger.addHandler(handler)
	logger.propagate = False
	return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
	"""Child logger under the service root, e.g. get_logger("handoff")."""
	if not name:
		return logging.getLogger(ROOT_LOGGER)
	return logging.getLogger(f"{ROOT_LOGGER}.{name}")

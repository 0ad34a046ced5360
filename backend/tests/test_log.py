import json
import logging

from language_coach.log import JSONFormatter, configure_logging, get_logger
from conftest import make_settings


def _record(msg="handled request", exc_info=None, **extra):
	record = logging.LogRecord("language_coach.http", logging.INFO, __file__, 1, msg, (), exc_info)
	for key, value in extra.items():
		setattr(record, key, value)
	return record


def test_request_fields_are_grouped_under_http():
	line = JSONFormatter().format(_record(request_id="abc", method="POST", path="/api/language/practice", status_code=200, duration_ms=12.5))
	entry = json.loads(line)
	assert entry["message"] == "handled request"
	assert entry["level"] == "info"
	assert entry["http"] == {"requestId": "abc", "method": "POST", "path": "/api/language/practice", "status": 200, "durationMs": 12.5}
	assert "request_id" not in entry


def test_service_context_stays_top_level():
	entry = json.loads(JSONFormatter().format(_record("language service start", operation="vocabulary", meta={"word": "resilient"})))
	assert entry["operation"] == "vocabulary"
	assert entry["meta"] == {"word": "resilient"}
	assert "http" not in entry


def test_exception_cause_is_recorded():
	try:
		try:
			raise ValueError("bad json")
		except ValueError as inner:
			raise RuntimeError("provider failed") from inner
	except RuntimeError as err:
		entry = json.loads(JSONFormatter().format(_record("language service error", exc_info=(type(err), err, err.__traceback__))))
	assert entry["error"] == {"type": "RuntimeError", "message": "provider failed", "cause": "ValueError"}


def test_configure_logging_selects_format():
	root = configure_logging(make_settings(log_format="text", log_level="debug"))
	assert root.level == logging.DEBUG
	assert not isinstance(root.handlers[0].formatter, JSONFormatter)
	root = configure_logging(make_settings())
	assert isinstance(root.handlers[0].formatter, JSONFormatter)
	assert get_logger("service").parent is root

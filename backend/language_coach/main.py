from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ServiceUnavailableError
from .gemini_client import GeminiClient
from .handoff import HandoffStore, InMemoryHandoffStore
from .log import configure_logging, get_logger
from .routers import health, language
from .services.language_service import LanguageService
from .settings import Settings, settings as default_settings
from .transcription import Transcriber, build_transcriber

logger = get_logger("http")

UNAVAILABLE_MESSAGE = "Language service temporarily unavailable."


def create_app(
	config: Optional[Settings] = None,
	*,
	store: Optional[HandoffStore] = None,
	client_factory: Optional[Callable[[], GeminiClient]] = None,
	transcriber: Optional[Transcriber] = None,
) -> FastAPI:
	config = config or default_settings
	configure_logging(config)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		if not config.provider_configured:
			logger.warning("GEMINI_API_KEY is not configured; serving fallback payloads only")
		logger.info(
			"language service init",
			extra={"detail": {"model": config.gemini_model, "mock_mode": config.mock_mode, "fallback_on_error": config.fallback_on_error, "transcriber": config.transcriber}},
		)
		yield

	app = FastAPI(title="Language Coach API", lifespan=lifespan)
	app.state.settings = config
	app.state.handoff_store = store or InMemoryHandoffStore(
		ttl_seconds=config.audio_ttl_seconds,
		max_entries=config.audio_max_entries,
	)
	app.state.language_service = LanguageService(
		config,
		app.state.handoff_store,
		client_factory=client_factory,
		transcriber=transcriber or build_transcriber(config),
	)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=config.cors_origin_list or ["*"],
		allow_methods=["GET", "POST", "OPTIONS"],
		allow_headers=["Content-Type"],
	)

	@app.middleware("http")
	async def request_context(request: Request, call_next):
		request_id = uuid.uuid4().hex
		start = time.perf_counter()
		base = {"request_id": request_id, "method": request.method, "path": request.url.path}
		try:
			response = await call_next(request)
		except Exception:
			logger.exception(
				"request failed",
				extra={**base, "duration_ms": round((time.perf_counter() - start) * 1000, 1)},
			)
			raise
		response.headers["x-request-id"] = request_id
		logger.info(
			"handled request",
			extra={
				**base,
				"status_code": response.status_code,
				"duration_ms": round((time.perf_counter() - start) * 1000, 1),
			},
		)
		return response

	app.add_exception_handler(RequestValidationError, _validation_error_handler)
	app.add_exception_handler(ServiceUnavailableError, _service_unavailable_handler)

	app.include_router(health.router)
	app.include_router(language.router)
	return app


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	field_errors: Dict[str, List[str]] = {}
	form_errors: List[str] = []
	for error in exc.errors():
		path = [str(part) for part in error.get("loc", ()) if part != "body"]
		message = error.get("msg", "Invalid value")
		if path:
			field_errors.setdefault(".".join(path), []).append(message)
		else:
			form_errors.append(message)
	return JSONResponse(
		status_code=400,
		content={"error": {"message": "Invalid request", "formErrors": form_errors, "fieldErrors": field_errors}},
	)


async def _service_unavailable_handler(request: Request, exc: ServiceUnavailableError) -> JSONResponse:
	# Provider detail stays in the logs.
	return JSONResponse(status_code=503, content={"error": UNAVAILABLE_MESSAGE})


app = create_app()

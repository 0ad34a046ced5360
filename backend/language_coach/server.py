import uvicorn

from .log import configure_logging, get_logger
from .settings import settings

logger = get_logger("server")


def main() -> None:
	configure_logging(settings)
	logger.info("language server listening on http://localhost:%s", settings.port)
	uvicorn.run("language_coach.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
	main()

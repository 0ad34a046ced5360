from fastapi import APIRouter, Request

from ..schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def health(request: Request):
	service = getattr(request.app.state, "language_service", None)
	config = request.app.state.settings
	return HealthStatus(
		service_ready=service is not None,
		provider_configured=config.provider_configured,
		mock_mode=service.should_mock() if service is not None else True,
	)

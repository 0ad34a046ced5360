from fastapi import APIRouter, Depends, Request

from ..schemas import (
	AudioUploadRequest,
	AudioUploadResult,
	PracticeFeedback,
	PracticeRequest,
	TranslationRequest,
	TranslationResult,
	VocabularyRequest,
	VocabularyResult,
)
from ..services.language_service import LanguageService

router = APIRouter(prefix="/api/language", tags=["language"])


def get_language_service(request: Request) -> LanguageService:
	return request.app.state.language_service


@router.post("/practice", response_model=PracticeFeedback)
async def practice(req: PracticeRequest, service: LanguageService = Depends(get_language_service)):
	return await service.generate_practice_feedback(req)


@router.post("/vocabulary", response_model=VocabularyResult, response_model_exclude_none=True)
async def vocabulary(req: VocabularyRequest, service: LanguageService = Depends(get_language_service)):
	return await service.query_vocabulary(req)


@router.post("/translation", response_model=TranslationResult)
async def translation(req: TranslationRequest, service: LanguageService = Depends(get_language_service)):
	return await service.generate_contextual_translation(req)


@router.post("/audio", response_model=AudioUploadResult)
def upload_audio(req: AudioUploadRequest, service: LanguageService = Depends(get_language_service)):
	"""Hand off a recording once and reference it later via ``audioId``."""
	return AudioUploadResult(audio_id=service.store_audio(req.audio_base64))

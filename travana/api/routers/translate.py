from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import DetectedLanguage, TranslateRequest, TranslationResult
from travana.core.errors import ValidationError
from travana.dependencies import get_translation_service
from travana.domain.services.translation_service import TranslationService

router = APIRouter(prefix="/translate", tags=["translate"])


@router.post("", response_model=TranslationResult)
async def translate(body: TranslateRequest, svc: TranslationService = Depends(get_translation_service)):
    if not body.text or not body.targetLanguage:
        raise ValidationError("Text and targetLanguage are required")
    return await svc.translate_text(body.text, body.targetLanguage, body.sourceLanguage)


@router.get("")
async def translation_info(
    action: Optional[str] = None,
    language: Optional[str] = None,
    text: Optional[str] = None,
    svc: TranslationService = Depends(get_translation_service),
):
    if action == "languages":
        return svc.get_supported_languages()

    if action == "phrasebook":
        if not language:
            raise ValidationError("Language parameter is required")
        return svc.get_phrase_book(language)

    if action == "detect":
        if not text:
            raise ValidationError("Text parameter is required")
        return DetectedLanguage(language=await svc.detect_language(text))

    raise ValidationError("Invalid action parameter")

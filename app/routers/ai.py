# app/routers/ai.py
import logging

from fastapi import APIRouter, Depends

from app.core.provider_clients import get_ai_service, get_translation_service
from app.schemas.ai import (
    ExplainSentenceResponse,
    ExtractVocabularyResponse,
    SentenceRequest,
    TranslateRequest,
    TranslateResponse,
)
from app.schemas.common import ApiResponse
from app.services.ai_service import AIService
from app.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["AI"])


@router.post("/ai-translate", response_model=ApiResponse[TranslateResponse])
async def ai_translate(
    payload: TranslateRequest,
    translator: TranslationService = Depends(get_translation_service),
):
    """
    Translate text (default English -> Indonesian).

    Never fails because of provider outages: when no provider answers,
    the static dictionary or "Translation unavailable" is returned.
    """
    translation = await translator.translate(
        payload.text, payload.source, payload.target
    )
    return ApiResponse[TranslateResponse](
        message="Translation completed successfully",
        data=TranslateResponse(translation=translation),
    )


@router.post(
    "/explain-sentence", response_model=ApiResponse[ExplainSentenceResponse]
)
async def explain_sentence(
    payload: SentenceRequest,
    translator: TranslationService = Depends(get_translation_service),
    ai: AIService = Depends(get_ai_service),
):
    """
    Indonesian translation plus a grammar explanation of an English sentence.

    503 when the explanation provider is unavailable.
    """
    explanation = await ai.explain_sentence(payload.sentence)
    translation = await translator.translate(payload.sentence)
    return ApiResponse[ExplainSentenceResponse](
        message="Sentence explained successfully",
        data=ExplainSentenceResponse(
            translation=translation, explanation=explanation
        ),
    )


@router.post(
    "/extract-vocabulary", response_model=ApiResponse[ExtractVocabularyResponse]
)
async def extract_vocabulary(
    payload: SentenceRequest,
    ai: AIService = Depends(get_ai_service),
):
    """List the words worth learning from an English sentence."""
    vocabulary = await ai.extract_vocabulary(payload.sentence)
    logger.info("Extracted %d vocabulary word(s)", len(vocabulary))
    return ApiResponse[ExtractVocabularyResponse](
        message="Vocabulary extracted successfully",
        data=ExtractVocabularyResponse(vocabulary=vocabulary),
    )

"""
Vision service — sends a plant photo to the vision model and gets back
a structured result: strain identification or problem diagnosis.

Every flow validates the photo first, makes at most one model call and
accepts the reply only if it matches the result schema exactly. Failures
never propagate: they come back as a Spanish message in `error`.
"""

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from cannaconnect.config import LLM_VISION_MODEL
from cannaconnect.errors import AnalysisError, InvalidPhotoError, ModelResponseError
from cannaconnect.models import (
    PlantProblemResponse,
    PlantProblemResult,
    StrainIdentificationResponse,
    StrainIdentificationResult,
    split_suggestion,
)
from cannaconnect.services.demo_data import DEMO_ANALYSIS, DEMO_IDENTIFICATION
from cannaconnect.services.llm import LLMClient, image_message, parse_json_reply
from cannaconnect.services.storage import archive_photo
from cannaconnect.services.validation import validate_photo_data_uri

logger = logging.getLogger(__name__)

INVALID_PHOTO_MESSAGE = "La foto proporcionada no es válida."
ANALYSIS_FAILED_MESSAGE = (
    "No se pudo completar el análisis. Es posible que el modelo no esté "
    "disponible; inténtalo más tarde."
)

IDENTIFY_STRAIN_PROMPT = """Eres un experto en identificación y salud de plantas de cannabis. Analiza la imagen proporcionada de una planta de cannabis.

1. **Identifica la Cepa:** Determina la cepa más probable de la planta.
2. **Estima la Potencia:** Proporciona un porcentaje estimado para THC y CBD (0-100). Además, proporciona un índice de "energía" de 0 (muy calmante) a 100 (muy energizante/hype).
3. **Detecta Problemas:** Analiza la planta en busca de signos visibles de plagas (como arañas rojas, mosquitos de los hongos), enfermedades (como oídio, moho del cogollo) o deficiencias de nutrientes. Enumera cualquier problema que encuentres.

TODA tu respuesta debe ser en español.

Responde SOLAMENTE con un JSON con esta estructura EXACTA, sin markdown ni texto adicional:
{
  "strainName": "Nombre de la cepa",
  "potency": {"thc": número 0-100, "cbd": número 0-100, "energy": número 0-100},
  "problems": ["Ácaros", "Oídio", "Deficiencia de Nitrógeno"]
}
Si no ves ningún problema, devuelve "problems": []."""

ANALYZE_PLANT_PROMPT = """Eres un experto en salud de plantas de cannabis. Analiza la imagen proporcionada de una planta de cannabis en busca de posibles problemas, como deficiencias de nutrientes, plagas o enfermedades. Proporciona una lista de los problemas identificados y sugerencias para solucionarlos.

TODA tu respuesta debe ser en español.

Cada sugerencia debe ser un texto con un título y una descripción separados por dos puntos, por ejemplo: "Título: Descripción detallada".

Responde SOLAMENTE con un JSON con esta estructura EXACTA, sin markdown ni texto adicional:
{
  "problems": ["Problema identificado"],
  "suggestions": ["Título: Descripción detallada"]
}"""

ResultT = TypeVar("ResultT", bound=BaseModel)


async def _request_analysis(
    client: LLMClient,
    prompt: str,
    photo_data_uri: str,
    result_type: Type[ResultT],
) -> ResultT:
    """One model call; the reply must validate against result_type or the whole call fails."""
    raw_text = await client.complete(
        messages=[image_message(prompt, photo_data_uri)],
        model=LLM_VISION_MODEL,
        json_output=True,
    )
    parsed = parse_json_reply(raw_text)
    try:
        return result_type.model_validate(parsed)
    except ValidationError as e:
        raise ModelResponseError(
            f"reply does not match {result_type.__name__}: {e.error_count()} error(s)"
        ) from e


async def identify_strain(
    photo_data_uri: str,
    client: Optional[LLMClient],
) -> StrainIdentificationResponse:
    """
    Identify the strain in a plant photo and estimate THC, CBD and energy.
    client=None runs in demo mode and returns fixed data after validation.
    """
    try:
        photo = validate_photo_data_uri(photo_data_uri)
    except InvalidPhotoError as e:
        logger.info("identify_strain rejected photo: %s", e)
        return StrainIdentificationResponse(error=INVALID_PHOTO_MESSAGE)

    if client is None:
        logger.warning("Identification is in DEMO mode. Returning demo data.")
        return StrainIdentificationResponse(
            data=StrainIdentificationResult.model_validate(DEMO_IDENTIFICATION),
            isDemo=True,
        )

    await archive_photo(photo, kind="identify")

    try:
        result = await _request_analysis(
            client, IDENTIFY_STRAIN_PROMPT, photo.photoDataUri, StrainIdentificationResult
        )
    except AnalysisError as e:
        logger.error("identify_strain failed: %s", e)
        return StrainIdentificationResponse(error=ANALYSIS_FAILED_MESSAGE)

    return StrainIdentificationResponse(data=result)


async def analyze_plant_for_problems(
    photo_data_uri: str,
    client: Optional[LLMClient],
) -> PlantProblemResponse:
    """
    Diagnose nutrient deficiencies, pests and diseases in a plant photo.
    Suggestions are returned as the model wrote them; suggestionItems is the
    split "title: detail" view for display.
    """
    try:
        photo = validate_photo_data_uri(photo_data_uri)
    except InvalidPhotoError as e:
        logger.info("analyze_plant_for_problems rejected photo: %s", e)
        return PlantProblemResponse(error=INVALID_PHOTO_MESSAGE)

    if client is None:
        logger.warning("Analysis is in DEMO mode. Returning demo data.")
        result = PlantProblemResult.model_validate(DEMO_ANALYSIS)
        return PlantProblemResponse(
            data=result,
            isDemo=True,
            suggestionItems=[split_suggestion(s) for s in result.suggestions],
        )

    await archive_photo(photo, kind="analyze")

    try:
        result = await _request_analysis(
            client, ANALYZE_PLANT_PROMPT, photo.photoDataUri, PlantProblemResult
        )
    except AnalysisError as e:
        logger.error("analyze_plant_for_problems failed: %s", e)
        return PlantProblemResponse(error=ANALYSIS_FAILED_MESSAGE)

    return PlantProblemResponse(
        data=result,
        suggestionItems=[split_suggestion(s) for s in result.suggestions],
    )

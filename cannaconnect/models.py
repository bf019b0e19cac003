"""
Pydantic models — these match the frontend's expected JSON shapes.
Results produced by the model are validated strictly: a response that
does not fit is discarded as a whole, never patched up.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Literal, Optional


class ImageAnalysisInput(BaseModel):
    photoDataUri: str = Field(
        ...,
        description="Foto de la planta como data URI: 'data:<mimetype>;base64,<encoded_data>'",
    )


# ── Model output ─────────────────────────────────────────────

class Potency(BaseModel):
    model_config = ConfigDict(strict=True)

    thc: float = Field(ge=0, le=100, description="Porcentaje estimado de THC")
    cbd: float = Field(ge=0, le=100, description="Porcentaje estimado de CBD")
    # 0 = muy calmante, 100 = muy energizante
    energy: float = Field(ge=0, le=100, description="Índice de efecto energizante")


class StrainIdentificationResult(BaseModel):
    model_config = ConfigDict(strict=True)

    strainName: str
    potency: Potency
    # May be empty, but must be present
    problems: List[str]


class PlantProblemResult(BaseModel):
    model_config = ConfigDict(strict=True)

    problems: List[str]
    # Conventionally "Título: descripción"; not enforced here
    suggestions: List[str]


class ChatMessage(BaseModel):
    model_config = ConfigDict(strict=True)

    role: Literal["user", "model"]
    content: str


# ── Presentation helpers ─────────────────────────────────────

class Suggestion(BaseModel):
    title: str
    detail: str


def split_suggestion(text: str) -> Suggestion:
    """Split a "title: detail" string on its first colon.

    When the model ignored the convention the whole string is used as the detail.
    """
    title, sep, detail = text.partition(":")
    detail = detail.strip()
    if not sep or not detail:
        return Suggestion(title=title.strip(), detail=text.strip())
    return Suggestion(title=title.strip(), detail=detail)


# ── API envelopes ────────────────────────────────────────────

class StrainIdentificationResponse(BaseModel):
    kind: Literal["strain_identification"] = "strain_identification"
    data: Optional[StrainIdentificationResult] = None
    error: Optional[str] = None
    isDemo: bool = False


class PlantProblemResponse(BaseModel):
    kind: Literal["plant_problems"] = "plant_problems"
    data: Optional[PlantProblemResult] = None
    error: Optional[str] = None
    isDemo: bool = False
    suggestionItems: List[Suggestion] = Field(default_factory=list)


class ChatRequest(BaseModel):
    # Checked by the chat requester itself so a malformed history,
    # including a non-list one, gets the friendly message instead of a 422.
    history: Any = Field(default_factory=list)


class ChatResponse(BaseModel):
    data: Optional[ChatMessage] = None
    error: Optional[str] = None


class CultivationTask(BaseModel):
    day: int
    phase: Literal["germination", "vegetative", "flowering"]
    name: str
    description: str


class ScheduledTask(CultivationTask):
    date: str


class CultivationPlanResponse(BaseModel):
    startDate: str
    tasks: List[ScheduledTask]


class LunarPhaseResponse(BaseModel):
    date: str
    phaseKey: str
    phaseName: str
    advice: str

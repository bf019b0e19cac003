"""
CannaConnect AI API
───────────────────
POST /identify        — recibe foto (data URI), regresa cepa + potencia + problemas
POST /analyze         — recibe foto (data URI), regresa problemas + sugerencias
POST /chat            — recibe historial de chat, regresa la siguiente respuesta de Canna-Toallín
GET  /calendar/plan   — plan de cultivo de 90 días a partir de una fecha
GET  /calendar/lunar  — fase lunar y consejo de cultivo para una fecha
GET  /health          — health check
"""

from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from cannaconnect.config import ALLOWED_ORIGINS, IS_DEMO
from cannaconnect.log import setup_logging
from cannaconnect.models import (
    ChatRequest,
    ChatResponse,
    CultivationPlanResponse,
    ImageAnalysisInput,
    LunarPhaseResponse,
    PlantProblemResponse,
    StrainIdentificationResponse,
)
from cannaconnect.services.chat import handle_chat
from cannaconnect.services.cultivation import build_cultivation_plan, get_lunar_phase
from cannaconnect.services.llm import LLMClient, get_llm_client
from cannaconnect.services.vision import analyze_plant_for_problems, identify_strain

setup_logging()

app = FastAPI(
    title="CannaConnect AI API",
    description="Identificación de cepas, diagnóstico de plantas y asistente de cultivo",
    version="0.1.0",
    docs_url="/docs",   # Swagger UI
    redoc_url="/redoc", # ReDoc
    openapi_url="/openapi.json",
)

# ── CORS ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health check ──────────────────────────────────────────────
@app.get("/")
def health():
    return {
        "status": "ok",
        "service": "CannaConnect AI API",
        "demo_mode": IS_DEMO,
    }


@app.get("/health")
def health_check():
    return {"status": "ok", "demo_mode": IS_DEMO}


# ── Strain identification ────────────────────────────────────
@app.post("/identify", response_model=StrainIdentificationResponse)
async def identify(
    request: ImageAnalysisInput,
    client: Optional[LLMClient] = Depends(get_llm_client),
):
    """
    Identifica la cepa más probable, estima THC/CBD/energía y lista problemas visibles.
    Los errores vienen en `error`, nunca como HTTP 500.
    """
    return await identify_strain(request.photoDataUri, client)


# ── Plant problem diagnosis ──────────────────────────────────
@app.post("/analyze", response_model=PlantProblemResponse)
async def analyze(
    request: ImageAnalysisInput,
    client: Optional[LLMClient] = Depends(get_llm_client),
):
    """Diagnostica deficiencias, plagas y enfermedades con sugerencias "Título: detalle"."""
    return await analyze_plant_for_problems(request.photoDataUri, client)


# ── Assistant chat ───────────────────────────────────────────
@app.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    client: Optional[LLMClient] = Depends(get_llm_client),
):
    """
    Recibe el historial completo de la sesión y devuelve solo el siguiente mensaje
    del asistente. El cliente agrega ambos turnos a su historial, en orden.
    """
    return await handle_chat(request.history, client)


# ── Cultivation calendar ─────────────────────────────────────
@app.get("/calendar/plan", response_model=CultivationPlanResponse)
def cultivation_plan(start: date = Query(..., description="Día 1 del cultivo (YYYY-MM-DD)")):
    return CultivationPlanResponse(
        startDate=start.isoformat(),
        tasks=build_cultivation_plan(start),
    )


@app.get("/calendar/lunar", response_model=LunarPhaseResponse)
def lunar_phase(day: Optional[date] = Query(None, alias="date")):
    return get_lunar_phase(day or date.today())

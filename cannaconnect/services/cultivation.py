"""
Cultivation calendar — the standard 90-day grow plan and lunar-phase
advice shown on the calendar page.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import List

from cannaconnect.models import CultivationTask, LunarPhaseResponse, ScheduledTask

GERMINATION_LAST_DAY = 7
VEGETATIVE_LAST_DAY = 37

PREDEFINED_TASKS: List[CultivationTask] = [
    # Germinación (días 1-7)
    CultivationTask(
        day=1,
        phase="germination",
        name="Iniciar Germinación",
        description="Coloca las semillas en un medio húmedo (ej. toallas de papel mojadas dentro de un tupper) en un lugar oscuro y cálido. Mantén la humedad constante.",
    ),
    CultivationTask(
        day=3,
        phase="germination",
        name="Revisar Humedad y Raíz",
        description="Asegúrate de que el medio de germinación siga húmedo. Busca la aparición de la raíz primaria (radícula). Si mide ~1cm, está lista para plantar.",
    ),
    CultivationTask(
        day=5,
        phase="germination",
        name="Plantar Semilla Germinada",
        description="Planta la semilla con la raíz hacia abajo, a 1-2 cm de profundidad en el sustrato final. Riega suavemente. Enciende la luz a 18h/día.",
    ),
    # Vegetativo (días 8-37)
    CultivationTask(
        day=8,
        phase="vegetative",
        name="Monitorear Primeras Hojas",
        description="Los cotiledones (primeras hojas redondas) deberían estar abiertos. Ahora aparecerá el primer par de hojas 'verdaderas' (serradas).",
    ),
    CultivationTask(
        day=15,
        phase="vegetative",
        name="Primer Riego con Nutrientes (1/4 dosis)",
        description="Introduce una dosis muy baja de nutrientes de crecimiento. Observa la reacción de la planta para evitar sobrefertilización.",
    ),
    CultivationTask(
        day=21,
        phase="vegetative",
        name="Considerar Inicio de LST (Low Stress Training)",
        description="Si la planta tiene 4-5 nudos, puedes empezar a doblar suavemente el tallo principal para fomentar un crecimiento más horizontal y tupido.",
    ),
    CultivationTask(
        day=28,
        phase="vegetative",
        name="Aumentar Nutrientes (1/2 dosis)",
        description="Si la planta responde bien, aumenta la dosis de nutrientes de crecimiento a la mitad de lo recomendado por el fabricante.",
    ),
    CultivationTask(
        day=35,
        phase="vegetative",
        name="Realizar Poda Apical (Opcional)",
        description="Si buscas múltiples colas principales, puedes cortar la punta del tallo principal. Esto estresa la planta; asegúrate de que esté sana antes de hacerlo.",
    ),
    # Floración (días 38-90)
    CultivationTask(
        day=38,
        phase="flowering",
        name="Cambio a 12/12 y Nutrientes de Floración",
        description="Cambia el ciclo de luz a 12 horas de luz y 12 de oscuridad para inducir la floración. Empieza a usar nutrientes específicos para esta fase.",
    ),
    CultivationTask(
        day=45,
        phase="flowering",
        name="Identificar Primeros Pistilos",
        description="Busca los 'pelitos' blancos (pistilos) en los nudos. Esto confirma que la planta ha entrado en floración y es hembra.",
    ),
    CultivationTask(
        day=55,
        phase="flowering",
        name="Defoliación Ligera",
        description="Quita algunas hojas grandes que tapen la luz a los cogollos inferiores para mejorar la penetración de la luz y la ventilación.",
    ),
    CultivationTask(
        day=65,
        phase="flowering",
        name="Pico de Desarrollo de Cogollos",
        description="Los cogollos deberían estar engordando visiblemente. Mantén una humedad baja (40-50%) para prevenir el moho.",
    ),
    CultivationTask(
        day=75,
        phase="flowering",
        name="Iniciar Lavado de Raíces",
        description="Deja de usar nutrientes y riega solo con agua (con pH ajustado). Esto elimina el exceso de sales del sustrato y mejora el sabor final.",
    ),
    CultivationTask(
        day=85,
        phase="flowering",
        name="Revisar Tricomas para Cosecha",
        description="Usa una lupa para observar los tricomas. Cosecha cuando la mayoría estén de color blanco lechoso y unos pocos de color ámbar.",
    ),
    CultivationTask(
        day=90,
        phase="flowering",
        name="¡Día de la Cosecha!",
        description="¡Felicidades! Es hora de cortar tu planta. Prepara el espacio de secado (oscuro, ventilado, 50-60% humedad).",
    ),
]


def phase_for_day(day: int) -> str:
    """Grow phase for a 1-based day of the plan."""
    if day < 1:
        raise ValueError(f"plan days start at 1, got {day}")
    if day <= GERMINATION_LAST_DAY:
        return "germination"
    if day <= VEGETATIVE_LAST_DAY:
        return "vegetative"
    return "flowering"


def build_cultivation_plan(start_date: date) -> List[ScheduledTask]:
    """Date every predefined task; day 1 falls on start_date. The phase follows from the day."""
    return [
        ScheduledTask(
            **task.model_dump(exclude={"phase"}),
            phase=phase_for_day(task.day),
            date=(start_date + timedelta(days=task.day - 1)).isoformat(),
        )
        for task in PREDEFINED_TASKS
    ]


# ── Lunar phase ──────────────────────────────────────────────

# Known new moon: 2023-01-21 20:53 UTC
KNOWN_NEW_MOON = datetime(2023, 1, 21, 20, 53, tzinfo=timezone.utc)
LUNAR_CYCLE_DAYS = 29.53058867

LUNAR_PHASES = [
    ("newMoon", "Luna Nueva", "Buen día para sembrar y plantar."),
    ("waxingCrescent", "Creciente Iluminante", "Ideal para el crecimiento de hojas y tallos."),
    ("firstQuarter", "Cuarto Creciente", "Buena energía para el crecimiento vegetativo."),
    ("waxingGibbous", "Gibosa Iluminante", "Favorable para podas y entrenamientos."),
    ("fullMoon", "Luna Llena", "Energía alta. Ideal para cosechar y aplicar fertilizantes foliares."),
    ("waningGibbous", "Gibosa Menguante", "Buen momento para trasplantes y trabajo de raíces."),
    ("lastQuarter", "Cuarto Menguante", "Propicio para podar y controlar plagas."),
    ("waningCrescent", "Menguante Balsámica", "Periodo de reposo. Evita tareas estresantes para la planta."),
]


def get_lunar_phase(day: date) -> LunarPhaseResponse:
    """Lunar phase for a calendar day, counted in whole days from a known new moon."""
    days_since = (day - KNOWN_NEW_MOON.date()).days
    cycle_day = math.fmod(math.fmod(days_since, LUNAR_CYCLE_DAYS) + LUNAR_CYCLE_DAYS, LUNAR_CYCLE_DAYS)
    index = int(cycle_day / LUNAR_CYCLE_DAYS * len(LUNAR_PHASES)) % len(LUNAR_PHASES)
    key, name, advice = LUNAR_PHASES[index]
    return LunarPhaseResponse(
        date=day.isoformat(),
        phaseKey=key,
        phaseName=name,
        advice=advice,
    )

"""Fixed results returned in DEMO mode (no LLM_API_KEY configured)."""

DEMO_IDENTIFICATION = {
    "strainName": "Cosecha Dorada",
    "potency": {
        "thc": 22.0,
        "cbd": 1.0,
        "energy": 65.0,
    },
    "problems": [
        "Puntas ligeramente quemadas (posible exceso de nutrientes)",
        "Hojas inferiores un poco amarillas (posible deficiencia de Nitrógeno)",
    ],
}

DEMO_ANALYSIS = {
    "problems": [
        "Deficiencia de Calcio (Manchas marrones en hojas nuevas)",
        "Posible inicio de Araña Roja (Pequeños puntos blancos en el envés de las hojas)",
    ],
    "suggestions": [
        "Ajustar pH del Agua: Asegúrate de que el pH de tu agua de riego esté entre 6.2 y 6.8. "
        "El calcio se absorbe mal fuera de este rango. Considera usar un suplemento de "
        "Calcio-Magnesio (Cal-Mag) en el próximo riego a mitad de dosis.",
        "Incrementar Humedad y Usar Aceite de Neem: La araña roja prospera en ambientes secos. "
        "Aumenta la humedad relativa si es posible. Aplica una solución de aceite de Neem en el "
        "envés de todas las hojas, preferiblemente justo antes de que se apaguen las luces para "
        "evitar quemaduras.",
    ],
}

DEMO_CHAT_REPLY = (
    "Estoy en modo demo: la clave del modelo no está configurada, así que por ahora "
    "no puedo responder preguntas. Añade LLM_API_KEY al archivo .env para activarme."
)

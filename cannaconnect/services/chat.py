"""
Chat service — Canna-Toallín, the cultivation assistant.
Receives the whole session history on every call and returns only the
next assistant turn. This path never raises: every failure becomes a
friendly filler message.
"""

import logging
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from cannaconnect.config import LLM_CHAT_MODEL
from cannaconnect.models import ChatMessage, ChatResponse
from cannaconnect.services.demo_data import DEMO_CHAT_REPLY
from cannaconnect.services.llm import LLMClient

logger = logging.getLogger(__name__)

CHAT_SYSTEM_PROMPT = """Eres Canna-Toallín, el asistente de cultivo de CannaConnect, una red social para cultivadores de cannabis.

REGLAS:
- Responde SIEMPRE en español, con un tono cercano, relajado y con algo de humor.
- Tu especialidad es el cultivo: germinación, fase vegetativa, floración, nutrientes, riego, plagas, enfermedades, cosecha y curado.
- Da consejos prácticos y concretos; usa números (pH, humedad, horas de luz) cuando ayuden.
- Si no sabes algo, dilo honestamente en lugar de inventarlo.
- Mantén las respuestas concisas (máximo 200 palabras)."""

GREETING_MESSAGE = "¡Hola! Soy Canna-Toallín, tu asistente de cultivo. ¿En qué te puedo ayudar?"
FORMAT_ERROR_MESSAGE = "Hubo un problema con el formato del historial de chat."
EMPTY_REPLY_MESSAGE = "Vaya, parece que me quedé sin palabras. ¿Puedes repetir la pregunta?"
CROSSED_WIRES_MESSAGE = (
    "Vaya, parece que se me cruzaron los cables. No pude procesar esa pregunta."
)

# Our "model" role is "assistant" on the wire
_WIRE_ROLES = {"user": "user", "model": "assistant"}


def _validate_history(history: Any) -> Optional[List[ChatMessage]]:
    """Return the history as ChatMessages, or None if any entry is malformed."""
    if not isinstance(history, (list, tuple)):
        return None
    messages: List[ChatMessage] = []
    for entry in history:
        if isinstance(entry, ChatMessage):
            messages.append(entry)
            continue
        if not isinstance(entry, dict):
            return None
        try:
            messages.append(ChatMessage.model_validate(entry))
        except ValidationError:
            return None
    return messages


def _build_transcript(messages: Sequence[ChatMessage]) -> List[dict]:
    transcript = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    transcript.extend(
        {"role": _WIRE_ROLES[m.role], "content": m.content} for m in messages
    )
    return transcript


async def assistant_chat(history: Any, client: Optional[LLMClient]) -> str:
    """
    Return the assistant's next message for the given history.
    Stateless: the caller owns the history and appends both turns.
    """
    messages = _validate_history(history)
    if messages is None:
        logger.info("Chat history rejected: malformed entry")
        return FORMAT_ERROR_MESSAGE

    if not messages:
        return GREETING_MESSAGE

    if client is None:
        logger.warning("Chat is in DEMO mode. Returning demo reply.")
        return DEMO_CHAT_REPLY

    try:
        reply = await client.complete(
            messages=_build_transcript(messages),
            model=LLM_CHAT_MODEL,
        )
    except Exception:
        logger.exception("Chat model call failed")
        return CROSSED_WIRES_MESSAGE

    if not reply:
        logger.warning("Chat model returned no text")
        return EMPTY_REPLY_MESSAGE
    return reply


async def handle_chat(history: Any, client: Optional[LLMClient]) -> ChatResponse:
    """API wrapper: the reply as a model-role ChatMessage."""
    reply = await assistant_chat(history, client)
    return ChatResponse(data=ChatMessage(role="model", content=reply))


class ChatSession:
    """
    In-memory, append-only transcript for one chat session.
    Each send appends the user turn, asks the model, then appends the reply.
    """

    def __init__(self) -> None:
        self._messages: List[ChatMessage] = []

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    async def send(self, content: str, client: Optional[LLMClient]) -> ChatMessage:
        self._messages.append(ChatMessage(role="user", content=content))
        reply = await assistant_chat(self.messages, client)
        answer = ChatMessage(role="model", content=reply)
        self._messages.append(answer)
        return answer

"""
Configuration — reads from environment variables.
When LLM_API_KEY is missing the whole app runs in DEMO mode
so the frontend can still be tested end-to-end.
"""
from dotenv import load_dotenv
load_dotenv()

import os

LLM_API_KEY = os.getenv("LLM_API_KEY", "")
# Any OpenAI-compatible chat completions endpoint (OpenRouter by default)
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1")
LLM_VISION_MODEL = os.getenv("LLM_VISION_MODEL", "google/gemini-2.0-flash-001")
LLM_CHAT_MODEL = os.getenv("LLM_CHAT_MODEL", "meta-llama/llama-3.1-8b-instruct:free")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Sent to OpenRouter for app attribution
APP_REFERER = os.getenv("APP_REFERER", "https://canna-connect.app")
APP_TITLE = os.getenv("APP_TITLE", "CannaConnect")

# S3 (optional — photos are analyzed in-memory without it)
AWS_S3_BUCKET = os.getenv("AWS_S3_BUCKET", "")
AWS_REGION = os.getenv("AWS_REGION", "us-east-2")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:9002,https://canna-connect.app"
).split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Values shipped in .env templates, never real keys
PLACEHOLDER_KEY_PREFIXES = ("YOUR_API_KEY_HERE", "YOUR_OPENROUTER_API_KEY_HERE")


def is_api_key_configured(key: str) -> bool:
    """True for a non-blank key that is not a template placeholder."""
    key = (key or "").strip()
    return bool(key) and not key.startswith(PLACEHOLDER_KEY_PREFIXES)


IS_DEMO = not is_api_key_configured(LLM_API_KEY)

from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel

from insights_hub.core.config import settings


def get_gemini_model() -> ChatGoogleGenerativeAI:
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_CHAT_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=settings.GEMINI_TEMPERATURE,
    )


def get_structured_model(schema: type[BaseModel]):
    """Gemini model whose output is parsed into ``schema``."""
    return get_gemini_model().with_structured_output(schema)

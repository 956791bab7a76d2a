import logging
from typing import Optional

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from ...config import settings
from ...application.ports.ai_provider import AIProvider

logger = logging.getLogger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.8,
    "top_p": 0.95,
    "top_k": 64,
    "max_output_tokens": 8192,
    "response_mime_type": "text/plain",
}

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_ONLY_HIGH,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
}


class GeminiProvider(AIProvider):
    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None, timeout: Optional[float] = None) -> None:
        genai.configure(api_key=api_key or settings.GEMINI_API_KEY)
        self.model_name = model_name or settings.GEMINI_MODEL
        self.timeout = timeout if timeout is not None else settings.AI_REQUEST_TIMEOUT
        self.model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config=GENERATION_CONFIG,
            safety_settings=SAFETY_SETTINGS,
        )
        logger.info(f"Gemini model configured: {self.model_name}")

    def generate_text(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        # single-turn: a fresh session per request, nothing carried across calls
        chat = self.model.start_chat(history=[])
        result = chat.send_message(
            [prompt, {"mime_type": mime_type, "data": image_bytes}],
            request_options={"timeout": self.timeout},
        )
        return result.text

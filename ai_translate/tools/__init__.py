"""
번역 도구 및 백엔드

- translate: 프롬프트 구성 후 번역 서비스 호출
- OllamaClient: Ollama /api/chat 백엔드 (기본)
- BedrockTranslator: Strands Agent 기반 Bedrock 백엔드
"""

from ai_translate.tools.service import TranslationService
from ai_translate.tools.translator_tool import (
    translate,
    build_prompt,
    combine_context,
    is_translatable,
)
from ai_translate.tools.ollama_client import OllamaClient, OllamaError
from ai_translate.tools.bedrock_translator import BedrockTranslator

__all__ = [
    # 인터페이스
    "TranslationService",
    # 번역 도구
    "translate",
    "build_prompt",
    "combine_context",
    "is_translatable",
    # 백엔드
    "OllamaClient",
    "OllamaError",
    "BedrockTranslator",
]

"""
Bedrock 번역 백엔드 - Strands Agent 기반

Ollama 대신 AWS Bedrock 모델로 번역합니다.
프롬프트 캐싱으로 반복되는 시스템 프롬프트 비용을 줄입니다.
"""

import logging
from functools import partial
from typing import Optional

from ai_translate.utils.strands_utils import (
    BedrockModelConfig,
    get_agent,
    run_agent_async,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a software localization translator. "
    "Reply with the translated text only."
)


class BedrockTranslator:
    """
    TranslationService 구현 (Bedrock).

    사용 예:
        translator = BedrockTranslator(BedrockModelConfig(region="us-east-1"))
        text = await translator.translate(prompt, fallback="Hello")
    """

    def __init__(
        self,
        config: Optional[BedrockModelConfig] = None,
        use_cache: bool = True
    ):
        self.config = config or BedrockModelConfig()
        self.use_cache = use_cache

    async def translate(self, user_prompt: str, fallback: str) -> str:
        """
        번역 요청 전송.

        시도마다 새 에이전트를 생성합니다 (에이전트는 대화 기록을 가짐).

        Returns:
            응답 텍스트, 비어 있으면 fallback
        """
        new_agent = partial(
            get_agent,
            config=self.config,
            system_prompt=SYSTEM_PROMPT,
            agent_name="translator",
            prompt_cache=self.use_cache,
        )

        result = await run_agent_async(
            new_agent,
            user_prompt,
            max_attempts=self.config.retry_max_attempts,
        )
        text = result["text"].strip()

        logger.debug(f"Bedrock 응답 토큰: {result['usage']}")

        return text or fallback

    async def aclose(self) -> None:
        return None

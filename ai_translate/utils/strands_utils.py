"""
Strands 연동 - Bedrock 번역 백엔드용 에이전트 생성 및 실행

- BedrockModelConfig: settings.yaml의 bedrock 섹션
- get_agent: 시스템 프롬프트 캐시 포인트가 붙은 단발성 번역 에이전트
- run_agent_async: 스트리밍 응답 수집 + 스로틀링 지수 백오프 (시도마다 새 에이전트)
"""

import asyncio
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Optional

from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError
from strands import Agent
from strands.models import BedrockModel
from strands.types.content import SystemContentBlock
from strands.types.exceptions import EventLoopException

logger = logging.getLogger(__name__)

THROTTLING_CODES = {"ThrottlingException", "TooManyRequestsException"}


@dataclass
class BedrockModelConfig:
    """Bedrock 번역 모델 설정"""
    model_id: str = "us.anthropic.claude-sonnet-4-5-20250929-v1:0"
    region: str = "us-west-2"
    max_tokens: int = 2000
    temperature: float = 0.3
    timeout_seconds: float = 60        # botocore connect/read 타임아웃
    retry_max_attempts: int = 5        # botocore 재시도 + 스로틀링 재시도 횟수

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "BedrockModelConfig":
        """설정 딕셔너리에서 생성 (없는 키는 기본값, 숫자 문자열은 변환)"""
        values = {}
        for f in fields(cls):
            if raw and f.name in raw:
                values[f.name] = f.type(raw[f.name]) if isinstance(f.type, type) else raw[f.name]
        return cls(**values)


def get_model(config: BedrockModelConfig, streaming: bool = True) -> BedrockModel:
    """설정값으로 BedrockModel 생성 (타임아웃/재시도는 botocore 클라이언트에 위임)"""
    return BedrockModel(
        model_id=config.model_id,
        region_name=config.region,
        streaming=streaming,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        boto_client_config=BotoConfig(
            connect_timeout=config.timeout_seconds,
            read_timeout=config.timeout_seconds,
            retries={"max_attempts": config.retry_max_attempts, "mode": "adaptive"},
        ),
    )


def get_agent(
    config: BedrockModelConfig,
    system_prompt: str,
    agent_name: str = "translator",
    prompt_cache: bool = True
) -> Agent:
    """
    번역 요청 하나에 쓸 Strands Agent 생성.

    Agent는 대화 기록을 누적하므로 동시 요청끼리 공유하면 안 됩니다.
    prompt_cache가 켜져 있으면 시스템 프롬프트 뒤에 cachePoint를 둡니다.
    """
    if prompt_cache:
        logger.debug(f"[{agent_name}] 시스템 프롬프트 캐시 사용")
        system_content = [
            SystemContentBlock(text=system_prompt),
            SystemContentBlock(cachePoint={"type": "default"}),
        ]
    else:
        system_content = system_prompt

    # 응답은 stream_async로 직접 수집
    return Agent(model=get_model(config), system_prompt=system_content, callback_handler=None)


def _is_throttling(error: Exception) -> bool:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "") in THROTTLING_CODES
    message = str(error).lower()
    return "throttling" in message or "too many requests" in message


async def _stream_text(agent: Agent, message: str) -> str:
    """에이전트 응답 스트림의 data 청크를 이어 붙임"""
    chunks = []
    async for event in agent.stream_async(message):
        if "data" in event:
            chunks.append(event["data"])
    return "".join(chunks)


def extract_usage_from_agent(agent: Agent) -> Dict[str, int]:
    """누적 토큰 사용량 (메트릭이 없으면 0)"""
    accumulated = getattr(getattr(agent, "event_loop_metrics", None), "accumulated_usage", None) or {}
    return {
        "input_tokens": accumulated.get("inputTokens", 0),
        "output_tokens": accumulated.get("outputTokens", 0),
        "total_tokens": accumulated.get("totalTokens", 0),
    }


async def run_agent_async(
    new_agent: Callable[[], Agent],
    message: str,
    max_attempts: int = 5,
    base_delay: float = 2
) -> Dict[str, Any]:
    """
    메시지 하나를 보내고 스트리밍된 텍스트를 이어 붙여 반환.

    스로틀링이면 base_delay * 2^n 초 대기 후 새 에이전트로 다시 요청합니다.
    중단된 시도의 부분 응답과 대화 기록은 버려집니다.
    스로틀링이 아닌 오류와 마지막 시도의 오류는 그대로 전파됩니다
    (게이트된 번역 작업에서 실패로 변환).

    Args:
        new_agent: 시도마다 호출되는 에이전트 팩토리
        message: 사용자 메시지
        max_attempts: 최대 시도 횟수
        base_delay: 첫 재시도 대기 시간(초)

    Returns:
        {"text": 응답 전체, "usage": 토큰 사용량}
    """
    attempt = 0
    while True:
        attempt += 1
        agent = new_agent()
        try:
            text = await _stream_text(agent, message)
        except (EventLoopException, ClientError) as e:
            if attempt >= max_attempts or not _is_throttling(e):
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.info(f"[⏳] Bedrock 스로틀링 - {delay}초 후 재시도 ({attempt}/{max_attempts})")
            await asyncio.sleep(delay)
            continue

        return {"text": text, "usage": extract_usage_from_agent(agent)}

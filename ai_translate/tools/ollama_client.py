"""
Ollama 클라이언트 - /api/chat 엔드포인트 기반 번역 백엔드

요청 하나당 사용자 메시지 하나를 보내고 스트리밍 없이 응답을 받습니다.
타임아웃은 요청 단위로 적용되며, 실패 처리는 호출자(게이트된 작업)가 담당합니다.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "translategemma:4b"
DEFAULT_TIMEOUT_SECONDS = 60.0


class ChatMessage(BaseModel):
    """채팅 메시지"""
    role: str = Field(..., description="user / assistant / system")
    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    """POST /api/chat 요청 본문"""
    model: str
    messages: List[ChatMessage]
    stream: bool = False


class ChatResponse(BaseModel):
    """POST /api/chat 응답 본문 (필요한 필드만)"""
    message: Optional[ChatMessage] = None


class OllamaError(Exception):
    """2xx 이외의 HTTP 응답"""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(self._describe())

    def _describe(self) -> str:
        if not self.body:
            return f"HTTP error {self.status_code}"
        return f"HTTP error {self.status_code}: {self.body}"


class OllamaClient:
    """
    Ollama 채팅 API 클라이언트.

    사용 예:
        async with OllamaClient("http://localhost:11434") as client:
            text = await client.translate(prompt, fallback="Hello")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            base_url: Ollama 서버 주소 (예: http://localhost:11434)
            model: 번역 모델 이름
            timeout: 요청별 타임아웃(초)
            http_client: 외부에서 주입할 httpx.AsyncClient (테스트용)
        """
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def chat_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/chat"

    async def translate(self, user_prompt: str, fallback: str) -> str:
        """
        번역 요청 전송.

        Args:
            user_prompt: 렌더링된 번역 프롬프트
            fallback: 응답에 message가 없을 때 반환할 텍스트

        Returns:
            모델 응답 텍스트 또는 fallback

        Raises:
            OllamaError: 2xx 이외의 응답
            httpx.HTTPError: 전송 오류, 타임아웃, 잘못된 URL
            ValueError: 응답 JSON 디코딩/검증 실패
        """
        payload = ChatRequest(
            model=self.model,
            messages=[ChatMessage(role="user", content=user_prompt)],
            stream=False,
        )

        response = await self._client.post(
            self.chat_url,
            json=payload.model_dump(),
            timeout=self.timeout,
        )

        if not 200 <= response.status_code <= 299:
            raise OllamaError(response.status_code, response.text)

        decoded = ChatResponse.model_validate_json(response.content)
        if decoded.message is None:
            logger.debug(f"응답에 message 없음, fallback 사용: {fallback[:40]}")
            return fallback
        return decoded.message.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OllamaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

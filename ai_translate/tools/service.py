"""
번역 서비스 인터페이스 - 백엔드 공통 계약

모든 백엔드(Ollama, Bedrock)는 프롬프트 하나를 받아 번역 텍스트를 반환합니다.
HTTP 오류, 전송 오류, 타임아웃은 예외로 전달되며,
응답에 사용할 수 있는 내용이 없으면 fallback을 반환합니다.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TranslationService(Protocol):
    """번역 백엔드 프로토콜"""

    async def translate(self, user_prompt: str, fallback: str) -> str:
        """
        프롬프트를 백엔드에 전송하고 번역 결과를 반환.

        Args:
            user_prompt: 렌더링된 번역 프롬프트
            fallback: 응답 본문이 비어 있을 때 반환할 텍스트 (보통 원문)

        Returns:
            번역된 텍스트 또는 fallback
        """
        ...

    async def aclose(self) -> None:
        """연결 자원 정리"""
        ...

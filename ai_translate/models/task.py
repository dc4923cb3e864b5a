"""
번역 작업 모델 - 엔트리별/언어별 번역 작업과 그 결과

오케스트레이터가 fan-out 시 생성하고, 병합 후 폐기하는 임시 데이터 구조입니다.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TranslationTask:
    """단일 언어 번역 작업"""
    key: str                                   # 카탈로그 엔트리 키
    language: str                              # 대상 언어 코드
    source_language: str                       # 소스 언어 코드
    source_text: str                           # 번역할 원문
    context: Optional[str] = None              # 엔트리 코멘트 + 앱 컨텍스트


@dataclass(frozen=True)
class TranslationOutcome:
    """번역 결과 (translation=None 이면 실패)"""
    language: str
    translation: Optional[str]
    error: Optional[str] = None                # 실패 사유 (진단용)
    latency_ms: int = 0                        # 응답 시간 (밀리초)

    @property
    def succeeded(self) -> bool:
        return self.translation is not None

"""
Observability - 카탈로그 번역 트레이싱 (OpenTelemetry)

스팬 구조:
    catalog-translation (세션 ID를 baggage로 전파)
    └─ entry (엔트리 키, 작업 집합)
       └─ translate (언어별 요청, 입출력 이벤트)

OpenTelemetry SDK가 설정되지 않으면 모든 스팬은 no-op입니다.
"""

import os
import uuid
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Tuple

from opentelemetry import baggage, context, trace
from opentelemetry.trace import Status, StatusCode

from ai_translate.models.task import TranslationTask

logger = logging.getLogger(__name__)

TRACER_NAME = os.getenv("TRACER_MODULE_NAME", "ai_translate")
MAX_ATTRIBUTE_LENGTH = 1000


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


def _attribute(value: Any) -> Any:
    if isinstance(value, (str, bool, int, float)):
        return value if not isinstance(value, str) else value[:MAX_ATTRIBUTE_LENGTH]
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)[:MAX_ATTRIBUTE_LENGTH]


def annotate(span: trace.Span, **attributes: Any) -> None:
    """스팬 속성 설정 (기록 중이 아닌 스팬은 무시)"""
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, _attribute(value))


def span_event(span: trace.Span, name: str, **attributes: Any) -> None:
    """스팬 이벤트 추가 (예: input/output 텍스트)"""
    if span.is_recording():
        span.add_event(name, {k: _attribute(v) for k, v in attributes.items() if v is not None})


def mark_failed(span: trace.Span, error: BaseException) -> None:
    """예외 기록 및 ERROR 상태 설정"""
    if span.is_recording():
        span.record_exception(error)
        span.set_status(Status(StatusCode.ERROR, str(error) or type(error).__name__))


@contextmanager
def _traced(name: str, **attributes: Any) -> Iterator[trace.Span]:
    with get_tracer().start_as_current_span(name, record_exception=False) as span:
        annotate(span, **attributes)
        try:
            yield span
        except Exception as e:
            mark_failed(span, e)
            raise
        if span.is_recording():
            span.set_status(Status(StatusCode.OK))


@contextmanager
def run_span(session_id: Optional[str] = None, **attributes: Any) -> Iterator[Tuple[trace.Span, str]]:
    """
    번역 실행 전체의 루트 스팬.

    세션 ID(미지정시 새 UUID)를 baggage에 넣어 하위 스팬에서 조회할 수 있게 합니다.

    Yields:
        (span, session_id) 튜플
    """
    session_id = session_id or str(uuid.uuid4())
    token = context.attach(baggage.set_baggage("session.id", session_id))
    try:
        with _traced("catalog-translation", **{"session.id": session_id}, **attributes) as span:
            yield span, session_id
    finally:
        context.detach(token)


@contextmanager
def entry_span(key: str, languages: Sequence[str]) -> Iterator[trace.Span]:
    """엔트리 하나의 fan-out/fan-in 구간"""
    with _traced("entry", **{"entry.key": key, "entry.work_set": languages}) as span:
        yield span


@contextmanager
def translation_span(task: TranslationTask) -> Iterator[trace.Span]:
    """
    언어별 번역 요청 하나.

    Example:
        with translation_span(task) as span:
            result = await translate(task, service)
            span_event(span, "output", text=result)
    """
    with _traced(
        "translate",
        **{
            "entry.key": task.key,
            "translation.source_lang": task.source_language,
            "translation.target_lang": task.language,
        }
    ) as span:
        span_event(span, "input", text=task.source_text, context=task.context)
        yield span


__all__ = [
    "get_tracer",
    "annotate",
    "span_event",
    "mark_failed",
    "run_span",
    "entry_span",
    "translation_span",
]

"""
워크플로우 노드 - 엔트리 번역 파이프라인의 각 단계 구현

각 노드는 하나의 단계를 담당:
- translate_language_node: 게이트된 단일 언어 번역 (실패는 None으로 변환)
- fan_out_node: 작업 집합의 언어별 번역을 동시 실행하고 완료 순으로 수집
- merge_node: 결과를 엔트리의 localizations에 병합 (통째로 교체)
"""

import asyncio
import logging
import time
from typing import Dict, List

from ai_translate.models.catalog import LocalizationGroup, LocalizationUnit
from ai_translate.models.task import TranslationTask, TranslationOutcome
from ai_translate.tools import translator_tool
from ai_translate.tools.service import TranslationService
from ai_translate.utils.async_gate import BoundedConcurrencyGate
from ai_translate.utils.observability import span_event, translation_span

logger = logging.getLogger(__name__)


async def translate_language_node(
    task: TranslationTask,
    gate: BoundedConcurrencyGate,
    service: TranslationService,
    verbose: bool = False
) -> TranslationOutcome:
    """
    게이트된 단일 언어 번역 노드.

    게이트 획득 → 번역 → 게이트 해제(무조건) 순서로 실행합니다.
    번역 실패는 예외로 전파하지 않고 translation=None 결과로 변환합니다.

    Args:
        task: 번역 작업
        gate: 동시 실행 제한 게이트
        service: 번역 백엔드
        verbose: 실패 시 예외 상세 로그 출력

    Returns:
        TranslationOutcome (실패 시 translation=None)
    """
    await gate.acquire()
    start_time = time.time()
    try:
        with translation_span(task) as span:
            translation = await translator_tool.translate(task, service)
            span_event(span, "output", text=translation)

        return TranslationOutcome(
            language=task.language,
            translation=translation,
            latency_ms=int((time.time() - start_time) * 1000)
        )

    except Exception as e:
        logger.error(f"[❌] Failed to translate {task.source_text} into {task.language}")
        if verbose:
            logger.error(f"[💥] {e}")
        return TranslationOutcome(
            language=task.language,
            translation=None,
            error=str(e) or type(e).__name__,
            latency_ms=int((time.time() - start_time) * 1000)
        )

    finally:
        gate.release()


async def fan_out_node(
    tasks: List[TranslationTask],
    gate: BoundedConcurrencyGate,
    service: TranslationService,
    verbose: bool = False
) -> List[TranslationOutcome]:
    """
    언어별 번역을 동시 실행하고 모두 끝날 때까지 대기.

    결과는 완료 순서대로 수집됩니다 (제출 순서 아님).
    대기 중 취소되면 남은 작업을 취소한 뒤 전파합니다.

    Returns:
        TranslationOutcome 리스트 (완료 순)
    """
    running = [
        asyncio.create_task(translate_language_node(task, gate, service, verbose))
        for task in tasks
    ]

    outcomes: List[TranslationOutcome] = []
    try:
        for finished in asyncio.as_completed(running):
            outcomes.append(await finished)
    finally:
        pending = [t for t in running if not t.done()]
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    return outcomes


def merge_node(
    group: LocalizationGroup,
    outcomes: List[TranslationOutcome]
) -> Dict[str, LocalizationUnit]:
    """
    번역 결과를 엔트리에 병합.

    기존 매핑을 복사한 뒤 결과 언어의 유닛만 새 유닛으로 교체하고,
    완성된 매핑으로 group.localizations를 통째로 교체합니다.
    작업 집합 밖의 언어 유닛은 그대로 유지됩니다.

    Returns:
        새 localizations 매핑
    """
    updated: Dict[str, LocalizationUnit] = dict(group.localizations or {})

    for outcome in outcomes:
        updated[outcome.language] = LocalizationUnit.from_result(outcome.translation)

    group.localizations = updated
    return updated

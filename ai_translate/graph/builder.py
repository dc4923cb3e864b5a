"""
워크플로우 빌더 - 카탈로그 번역 오케스트레이션

흐름 (엔트리 단위, 카탈로그 순서대로):
    PLAN → (작업 없음) ──────────────────────────┐
      ↓                                          ↓
    FAN-OUT (게이트로 동시 실행 제한) → FAN-IN → MERGE → PROGRESS

엔트리 N의 병합이 끝난 뒤에야 엔트리 N+1의 fan-out이 시작됩니다.
카탈로그는 조정 코루틴 하나에서만 변경되므로 별도의 잠금이 필요 없습니다.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ai_translate.graph.nodes import fan_out_node, merge_node
from ai_translate.graph.progress import ProgressTracker, log_progress
from ai_translate.models.catalog import LocalizationGroup, StringCatalog
from ai_translate.models.task import TranslationOutcome, TranslationTask
from ai_translate.tools.service import TranslationService
from ai_translate.tools.translator_tool import combine_context
from ai_translate.utils.async_gate import BoundedConcurrencyGate
from ai_translate.utils.observability import entry_span, run_span
from sops.entry_planning import EntryPlan, EntryPlanningConfig, EntryPlanningSOP

logger = logging.getLogger(__name__)


@dataclass
class OrchestratorConfig:
    """오케스트레이터 설정"""
    languages: List[str] = field(default_factory=list)  # 대상 언어 목록
    force: bool = False                  # 번역 완료 유닛도 다시 번역
    max_parallel: int = 4                # 최대 동시 번역 수 (1 미만이면 1)
    app_context: Optional[str] = None    # 모든 엔트리에 붙는 앱 컨텍스트
    verbose: bool = False                # 실패 상세 로그
    session_id: Optional[str] = None     # 트레이스 세션 ID (미지정시 자동 생성)


@dataclass
class RunMetrics:
    """실행 메트릭"""
    entries: int = 0
    translated: int = 0
    failed: int = 0
    skipped: int = 0           # 이미 번역됨
    unsupported: int = 0       # variations 등 미지원 형식
    elapsed_seconds: float = 0.0


class TranslationOrchestrator:
    """
    카탈로그 번역 오케스트레이터.

    흐름:
    1. 엔트리별 번역 계획 (EntryPlanningSOP)
    2. 작업 집합의 언어별 번역을 게이트로 제한하며 동시 실행
    3. 모든 결과를 기다린 뒤 엔트리에 병합
    4. 진행률 갱신

    사용 예:
        config = OrchestratorConfig(languages=["de", "fr"], max_parallel=4)
        orchestrator = TranslationOrchestrator(service, config)
        metrics = await orchestrator.run(catalog)
    """

    def __init__(
        self,
        service: TranslationService,
        config: Optional[OrchestratorConfig] = None,
        on_progress: Callable[[int], None] = log_progress
    ):
        """
        Args:
            service: 번역 백엔드
            config: 오케스트레이터 설정. 미제공시 기본값 사용.
            on_progress: 10% 단위 진행률 알림 콜백
        """
        self.service = service
        self.config = config or OrchestratorConfig()
        self.on_progress = on_progress
        self.planner = EntryPlanningSOP(EntryPlanningConfig(force=self.config.force))
        self.gate = BoundedConcurrencyGate(self.config.max_parallel)
        self.metrics = RunMetrics()

    async def run(self, catalog: StringCatalog) -> RunMetrics:
        """
        카탈로그 전체 번역.

        Args:
            catalog: 번역할 카탈로그 (제자리에서 변경됨)

        Returns:
            RunMetrics
        """
        start_time = time.time()
        languages = self.config.languages
        total = len(catalog.strings) * len(languages)
        progress = ProgressTracker(total=total, notify=self.on_progress)
        self.metrics = RunMetrics()

        logger.info(
            f"번역 시작: {len(catalog.strings)}개 엔트리 × {len(languages)}개 언어, "
            f"동시성 {self.gate.limit}"
        )

        with run_span(self.config.session_id, entries=len(catalog.strings), languages=languages) as (_, session_id):
            logger.debug(f"Session ID: {session_id}")

            for key, group in catalog.entries():
                await self.process_entry(key, group, catalog.source_language)
                self.metrics.entries += 1
                progress.advance(len(languages))

        self.metrics.elapsed_seconds = time.time() - start_time

        logger.info(
            f"번역 완료: 성공 {self.metrics.translated}, 실패 {self.metrics.failed}, "
            f"건너뜀 {self.metrics.skipped}, 미지원 {self.metrics.unsupported}"
        )

        return self.metrics

    async def process_entry(
        self,
        key: str,
        group: LocalizationGroup,
        source_language: str
    ) -> List[TranslationOutcome]:
        """
        엔트리 하나 처리: 계획 → fan-out → fan-in → 병합.

        작업 집합이 비어 있으면 게이트와 번역 서비스를 전혀 사용하지 않습니다.

        Returns:
            이번 엔트리의 번역 결과 (작업 없으면 빈 리스트)
        """
        plan = self.planner.plan(key, group, self.config.languages, source_language)
        self._record_skips(plan)

        if plan.is_noop:
            return []

        tasks = self._build_tasks(plan, source_language)

        with entry_span(key, plan.languages):
            outcomes = await fan_out_node(tasks, self.gate, self.service, self.config.verbose)

        merge_node(group, outcomes)

        for outcome in outcomes:
            if outcome.succeeded:
                self.metrics.translated += 1
            else:
                self.metrics.failed += 1

        return outcomes

    def _build_tasks(self, plan: EntryPlan, source_language: str) -> List[TranslationTask]:
        context = combine_context(plan.context, self.config.app_context)
        return [
            TranslationTask(
                key=plan.key,
                language=lang,
                source_language=source_language,
                source_text=plan.source_text,
                context=context
            )
            for lang in plan.languages
        ]

    def _record_skips(self, plan: EntryPlan) -> None:
        self.metrics.skipped += len(plan.already_translated)
        self.metrics.unsupported += len(plan.unsupported)
        for _ in plan.unsupported:
            logger.warning(f"[⚠️] Unsupported format in entry with key: {plan.key}")

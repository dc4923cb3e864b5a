"""
카탈로그 번역 오케스트레이션

엔트리 단위 fan-out/fan-in 번역 파이프라인.

사용 예:
    from ai_translate.graph import TranslationOrchestrator, OrchestratorConfig

    config = OrchestratorConfig(languages=["de", "fr"], max_parallel=4)
    orchestrator = TranslationOrchestrator(service, config)
    metrics = await orchestrator.run(catalog)
"""

# 오케스트레이터
from ai_translate.graph.builder import (
    TranslationOrchestrator,
    OrchestratorConfig,
    RunMetrics
)

# 진행률
from ai_translate.graph.progress import ProgressTracker, log_progress

# 개별 노드 (고급 사용자용)
from ai_translate.graph.nodes import (
    translate_language_node,
    fan_out_node,
    merge_node
)

__all__ = [
    # 메인 API
    "TranslationOrchestrator",
    "OrchestratorConfig",
    "RunMetrics",
    # 진행률
    "ProgressTracker",
    "log_progress",
    # 노드 (고급)
    "translate_language_node",
    "fan_out_node",
    "merge_node",
]

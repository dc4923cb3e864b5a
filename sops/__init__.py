"""
SOPs (Standard Operating Procedures) - 의사결정 로직 레이어

카탈로그 번역 파이프라인의 의사결정 로직을 담당하는 모듈:

- EntryPlanningSOP: 엔트리별 번역 대상 언어 및 원문 결정
"""

from sops.entry_planning import (
    EntryPlanningSOP,
    EntryPlanningConfig,
    EntryPlan,
)

__all__ = [
    # 엔트리 계획
    "EntryPlanningSOP",
    "EntryPlanningConfig",
    "EntryPlan",
]

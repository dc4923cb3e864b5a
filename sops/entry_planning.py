"""
엔트리 번역 계획 SOP - 이번 실행에서 번역할 언어 결정

목적: 카탈로그 엔트리 하나에 대해 실제로 번역이 필요한 대상 언어와 원문을 결정

비즈니스 규칙 (대상 언어별, 순서대로):
- 기존 유닛이 번역 완료 상태이고 force가 아니면: 건너뜀 (이미 완료)
- 기존 유닛이 지원하지 않는 형식(복수형/디바이스 variations)이면: 영구 건너뜀 + 경고
  (force 여부와 무관, 재시도/병합 없음)
- 그 외: 작업 집합에 포함

원문 결정:
- 소스 언어 유닛에 값이 있으면 그 값을 사용
- 없으면 엔트리 키 자체를 원문으로 사용
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ai_translate.models.catalog import LocalizationGroup


@dataclass
class EntryPlanningConfig:
    """계획 설정"""
    force: bool = False           # 번역 완료 유닛도 다시 번역


@dataclass
class EntryPlan:
    """엔트리 하나에 대한 번역 계획"""
    key: str
    source_text: str
    context: Optional[str] = None                            # 엔트리 코멘트
    languages: List[str] = field(default_factory=list)       # 작업 집합
    already_translated: List[str] = field(default_factory=list)
    unsupported: List[str] = field(default_factory=list)     # 경고 대상

    @property
    def is_noop(self) -> bool:
        """작업 집합이 비어 있으면 게이트/번역 서비스를 호출하지 않음"""
        return not self.languages


class EntryPlanningSOP:
    """
    엔트리 번역 계획 SOP

    카탈로그를 변경하지 않는 순수 판정 로직입니다.
    같은 입력에 대해 항상 같은 계획을 반환합니다.
    """

    def __init__(self, config: Optional[EntryPlanningConfig] = None):
        """
        Args:
            config: 계획 설정. 미제공시 기본값 사용.
        """
        self.config = config or EntryPlanningConfig()

    def plan(
        self,
        key: str,
        group: LocalizationGroup,
        languages: Sequence[str],
        source_language: str
    ) -> EntryPlan:
        """
        엔트리의 번역 계획 수립.

        Args:
            key: 엔트리 키 (소스 유닛이 없으면 원문으로 사용)
            group: 카탈로그 엔트리
            languages: 전체 대상 언어 목록
            source_language: 카탈로그 소스 언어

        Returns:
            EntryPlan: 작업 집합과 건너뛴 언어 목록
        """
        plan = EntryPlan(
            key=key,
            source_text=self.resolve_source_text(key, group, source_language),
            context=group.comment,
        )

        for lang in languages:
            unit = group.unit_for(lang)

            if unit is not None and unit.has_translation and not self.config.force:
                plan.already_translated.append(lang)
                continue

            if unit is not None and not unit.is_supported_format:
                plan.unsupported.append(lang)
                continue

            plan.languages.append(lang)

        return plan

    @staticmethod
    def resolve_source_text(
        key: str,
        group: LocalizationGroup,
        source_language: str
    ) -> str:
        """소스 언어 유닛의 값, 없거나 비어 있으면 키"""
        unit = group.unit_for(source_language)
        if unit is not None and unit.string_unit is not None and unit.string_unit.value:
            return unit.string_unit.value
        return key

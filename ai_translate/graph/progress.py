"""
진행률 추적 - 10% 단위 진행률 알림

처리 건수는 엔트리마다 전체 대상 언어 수만큼 증가합니다 (건너뛴 언어 포함).
분모는 엔트리 수 x 언어 수이므로 근사치이지만 단조 증가합니다.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

PROGRESS_STEP = 10


def log_progress(percentage: int) -> None:
    """기본 알림: 진행률 로그 한 줄"""
    logger.info(f"[⏳] {percentage}%")


@dataclass
class ProgressTracker:
    """
    진행률 추적기.

    조정 코루틴 하나에서만 호출됩니다 (fan-out 사이에서만 갱신).
    새로 넘은 10의 배수마다 정확히 한 번, 오름차순으로 알립니다.
    """
    total: int
    notify: Callable[[int], None] = log_progress
    processed: int = 0
    last_reported: int = 0

    @property
    def percentage(self) -> Optional[int]:
        """현재 진행률 (전체가 0이면 None)"""
        if self.total <= 0:
            return None
        return min(100, self.processed * 100 // self.total)

    def advance(self, count: int) -> List[int]:
        """
        처리 건수 증가 후 새로 넘은 임계값 알림.

        Args:
            count: 이번 엔트리의 전체 대상 언어 수

        Returns:
            이번에 알린 임계값 목록
        """
        self.processed += count

        percentage = self.percentage
        if percentage is None:
            return []

        crossed = []
        threshold = self.last_reported + PROGRESS_STEP
        while threshold <= percentage:
            crossed.append(threshold)
            threshold += PROGRESS_STEP

        for value in crossed:
            self.notify(value)
            self.last_reported = value

        return crossed

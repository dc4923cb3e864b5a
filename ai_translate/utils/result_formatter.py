"""
결과 포맷터 - 실행 메트릭을 로그 및 JSON 직렬화 가능한 dict로 변환

cli.py 및 다른 스크립트에서 재사용 가능.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

_DURATION_UNITS = (
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def format_duration(seconds: float) -> str:
    """
    경과 시간을 "1 hour, 2 minutes, 3 seconds" 형식으로 변환.

    0인 단위는 생략하며, 전부 0이면 "0 seconds"를 반환합니다.
    """
    remaining = max(0, int(seconds))
    parts: List[str] = []

    for name, size in _DURATION_UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount} {name}" + ("" if amount == 1 else "s"))

    return ", ".join(parts) if parts else "0 seconds"


def format_completion_lines(elapsed_seconds: float) -> List[str]:
    """실행 종료 로그 두 줄"""
    return [
        "[✅] 100%",
        f"[⏰] Translations time: {format_duration(elapsed_seconds)}",
    ]


def format_run_summary(metrics: Any, input_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    RunMetrics를 JSON 직렬화 가능한 dict로 변환.

    Args:
        metrics: TranslationOrchestrator.run() 반환값
        input_path: 번역한 카탈로그 경로

    Returns:
        JSON 직렬화 가능한 dict
    """
    attempted = metrics.translated + metrics.failed

    return {
        "input": str(input_path) if input_path else None,
        "created_at": datetime.now().isoformat(),
        "entries": metrics.entries,
        "translated": metrics.translated,
        "failed": metrics.failed,
        "skipped": metrics.skipped,
        "unsupported": metrics.unsupported,
        "success_rate": round(metrics.translated / attempted * 100, 1) if attempted > 0 else 0,
        "elapsed_seconds": round(metrics.elapsed_seconds, 3),
        "elapsed": format_duration(metrics.elapsed_seconds),
    }


def save_run_summary(metrics: Any, run_dir: Path, input_path: Optional[Path] = None) -> Path:
    """실행 요약을 JSON 파일로 저장"""
    run_dir.mkdir(parents=True, exist_ok=True)
    file_path = run_dir / "_summary.json"

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(format_run_summary(metrics, input_path), f, ensure_ascii=False, indent=2)

    return file_path

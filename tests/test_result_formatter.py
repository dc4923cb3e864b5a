import json

import pytest

from ai_translate.graph import RunMetrics
from ai_translate.utils.result_formatter import (
    format_completion_lines,
    format_duration,
    format_run_summary,
    save_run_summary,
)


@pytest.mark.parametrize("seconds,expected", [
    (0, "0 seconds"),
    (0.4, "0 seconds"),
    (1, "1 second"),
    (59.9, "59 seconds"),
    (60, "1 minute"),
    (62, "1 minute, 2 seconds"),
    (3600, "1 hour"),
    (3723, "1 hour, 2 minutes, 3 seconds"),
    (7260, "2 hours, 1 minute"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_completion_lines():
    assert format_completion_lines(125) == [
        "[✅] 100%",
        "[⏰] Translations time: 2 minutes, 5 seconds",
    ]


def test_run_summary(tmp_path):
    metrics = RunMetrics(entries=5, translated=8, failed=2, skipped=3, unsupported=1, elapsed_seconds=61.25)

    summary = format_run_summary(metrics, tmp_path / "Localizable.xcstrings")

    assert summary["success_rate"] == 80.0
    assert summary["elapsed"] == "1 minute, 1 second"
    assert summary["input"].endswith("Localizable.xcstrings")

    path = save_run_summary(metrics, tmp_path / "runs")
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["translated"] == 8
    assert saved["input"] is None


def test_run_summary_without_attempts():
    assert format_run_summary(RunMetrics())["success_rate"] == 0

"""
명령줄 진입점 - .xcstrings 카탈로그 번역

사용법:
    ai-translate Localizable.xcstrings -l de,fr
    ai-translate Localizable.xcstrings -l de -o http://gpu-box:11434 -m 8 -v
    ai-translate Localizable.xcstrings -l ja --backend bedrock --config my_settings.yaml
    python -m ai_translate Localizable.xcstrings -l de,fr

옵션:
    -l, --languages     쉼표로 구분한 대상 언어 코드 (xcstrings의 코드와 일치해야 함)
    -o, --ollama-url    Ollama 서버 주소
    -a, --app-context   모든 엔트리에 붙일 앱 컨텍스트
    -m, --max-parallel  최대 동시 번역 수
    -v, --verbose       실패 상세 및 번역 결과 로그
    -s, --skip-backup   <file>.original 백업 생략
    -f, --force         번역 완료 유닛도 다시 번역

종료 코드:
    0  성공
    1  카탈로그 읽기/쓰기 실패
    2  잘못된 인자 또는 설정
"""

# =============================================================================
# 의존성
# =============================================================================
import argparse
import asyncio
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from ai_translate.graph import OrchestratorConfig, RunMetrics, TranslationOrchestrator
from ai_translate.tools import BedrockTranslator, OllamaClient, TranslationService
from ai_translate.utils.catalog_io import CatalogError, load_catalog, save_catalog
from ai_translate.utils.config import get_settings
from ai_translate.utils.result_formatter import format_completion_lines, save_run_summary
from ai_translate.utils.strands_utils import BedrockModelConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CATALOG_ERROR = 1
EXIT_USAGE_ERROR = 2

BACKENDS = ("ollama", "bedrock")


# =============================================================================
# 설정
# =============================================================================
def configure_logging(verbose: bool = False) -> None:
    """로그 포맷 설정 및 불필요한 로그 억제"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("strands").setLevel(logging.WARNING)

    if verbose:
        logging.getLogger("ai_translate").setLevel(logging.DEBUG)
        logging.getLogger("sops").setLevel(logging.DEBUG)


def gather_languages(values: Optional[Sequence[str]]) -> List[str]:
    """
    "-l de,fr -l ja" 형식의 입력을 언어 코드 목록으로 변환.

    공백을 제거하고 빈 항목과 중복을 버리며, 처음 등장한 순서를 유지합니다.
    """
    languages: List[str] = []
    for value in values or []:
        for item in value.split(","):
            code = item.strip()
            if code and code not in languages:
                languages.append(code)
    return languages


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-translate",
        description="Translate an Xcode String Catalog (.xcstrings) with an LLM"
    )
    parser.add_argument("input_file", type=Path, help="입력 .xcstrings 파일")
    parser.add_argument(
        "-l", "--languages", action="append", required=True,
        help="쉼표로 구분한 언어 코드 (xcstrings의 언어 코드와 일치해야 함)"
    )
    parser.add_argument("-o", "--ollama-url", type=str, help="Ollama 서버 주소 (예: http://localhost:11434)")
    parser.add_argument("-a", "--app-context", type=str, help="번역 품질을 위한 추가 앱 컨텍스트")
    parser.add_argument("-m", "--max-parallel", type=int, help="최대 동시 번역 수 (기본: 4)")
    parser.add_argument("-v", "--verbose", action="store_true", help="상세 로그 (실패 원인, 번역 결과)")
    parser.add_argument("-s", "--skip-backup", action="store_true", help="<file>.original 백업 생략")
    parser.add_argument("-f", "--force", action="store_true", help="기존 번역이 있어도 모두 다시 번역")
    parser.add_argument("--backend", choices=BACKENDS, help="번역 백엔드 (기본: settings.yaml)")
    parser.add_argument("--model", type=str, help="백엔드 모델 이름/ID")
    parser.add_argument("--timeout", type=float, help="요청별 타임아웃(초)")
    parser.add_argument("--config", type=str, help="설정 오버라이드 YAML 파일")
    parser.add_argument("--summary-dir", type=Path, help="실행 요약 JSON 저장 디렉토리")
    parser.add_argument("--session-id", type=str, help="커스텀 트레이스 세션 ID")
    return parser


def resolve_settings(args: argparse.Namespace) -> Dict[str, Any]:
    """
    패키지 기본값 ← --config 파일 ← 명령줄 플래그 순서로 병합.

    Raises:
        FileNotFoundError: --config 파일 없음
        ValueError: 잘못된 설정 값 또는 알 수 없는 백엔드
        yaml.YAMLError: 설정 파일 파싱 실패
    """
    settings = get_settings(args.config)
    settings.setdefault("ollama", {})
    settings.setdefault("bedrock", {})

    if args.backend:
        settings["backend"] = args.backend
    if args.max_parallel is not None:
        settings["max_parallel"] = args.max_parallel
    if args.ollama_url:
        settings["ollama"]["base_url"] = args.ollama_url

    backend = settings.get("backend", "ollama")
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend '{backend}' (expected one of: {', '.join(BACKENDS)})")

    if args.model:
        settings[backend]["model" if backend == "ollama" else "model_id"] = args.model
    if args.timeout is not None:
        settings[backend]["timeout_seconds"] = args.timeout

    settings["backend"] = backend

    # 숫자 설정은 번역 시작 전에 변환
    try:
        settings["max_parallel"] = int(settings.get("max_parallel", 4))
        if backend == "ollama":
            ollama = settings["ollama"]
            ollama["timeout_seconds"] = float(ollama.get("timeout_seconds", 60))
        else:
            settings["bedrock"] = asdict(BedrockModelConfig.from_dict(settings["bedrock"]))
    except (AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid {backend} setting: {e}") from e

    return settings


def build_service(settings: Dict[str, Any]) -> TranslationService:
    """설정에 맞는 번역 백엔드 생성"""
    backend = settings.get("backend", "ollama")

    if backend == "bedrock":
        return BedrockTranslator(BedrockModelConfig.from_dict(settings.get("bedrock")))

    ollama = settings.get("ollama", {})
    return OllamaClient(
        base_url=ollama.get("base_url", "http://localhost:11434"),
        model=ollama.get("model", "translategemma:4b"),
        timeout=float(ollama.get("timeout_seconds", 60)),
    )


# =============================================================================
# 실행
# =============================================================================
async def run_translation(
    args: argparse.Namespace,
    languages: List[str],
    settings: Dict[str, Any],
    service: Optional[TranslationService] = None
) -> RunMetrics:
    """
    카탈로그 로드 → 번역 → 저장.

    Raises:
        CatalogError: 카탈로그 읽기/쓰기 실패
    """
    catalog = load_catalog(args.input_file)

    service = service or build_service(settings)
    config = OrchestratorConfig(
        languages=languages,
        force=args.force,
        max_parallel=settings["max_parallel"],
        app_context=args.app_context,
        verbose=args.verbose,
        session_id=args.session_id
    )

    try:
        metrics = await TranslationOrchestrator(service, config).run(catalog)
    finally:
        await service.aclose()

    save_catalog(catalog, args.input_file, backup=not args.skip_backup)
    return metrics


def main(argv: Optional[Sequence[str]] = None) -> int:
    """명령줄 인자를 파싱하고 번역 실행"""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    languages = gather_languages(args.languages)
    if not languages:
        parser.error("at least one language code is required (-l de,fr)")

    try:
        settings = resolve_settings(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"설정 오류: {e}")
        return EXIT_USAGE_ERROR

    logger.info(
        f"입력: {args.input_file} | 언어: {', '.join(languages)} | 백엔드: {settings['backend']}"
    )

    try:
        metrics = asyncio.run(run_translation(args, languages, settings))
    except CatalogError as e:
        logger.error(f"[❌] {e}")
        return EXIT_CATALOG_ERROR

    for line in format_completion_lines(metrics.elapsed_seconds):
        logger.info(line)

    if args.summary_dir:
        summary_path = save_run_summary(metrics, args.summary_dir, args.input_file)
        logger.info(f"📊 요약: {summary_path}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

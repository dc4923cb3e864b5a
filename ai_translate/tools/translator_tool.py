"""
번역 도구 - 프롬프트 구성 및 번역 서비스 호출

번역할 필요가 없는 텍스트(공백/기호/제어 문자만으로 구성)는
서비스를 호출하지 않고 원문을 그대로 반환합니다.
"""

import logging
import unicodedata
from typing import Optional

from ai_translate.models.task import TranslationTask
from ai_translate.prompts.template import load_prompt
from ai_translate.tools.service import TranslationService

logger = logging.getLogger(__name__)

# Unicode 기호(S*) 및 제어/서식 문자
_SKIPPABLE_CATEGORIES = {"Sm", "Sc", "Sk", "So", "Cc", "Cf"}


def is_translatable(text: str) -> bool:
    """공백, 기호, 제어 문자 이외의 문자가 하나라도 있으면 True"""
    for ch in text:
        if ch.isspace() or unicodedata.category(ch) in _SKIPPABLE_CATEGORIES:
            continue
        return True
    return False


def combine_context(
    entry_context: Optional[str] = None,
    app_context: Optional[str] = None
) -> Optional[str]:
    """엔트리 코멘트와 앱 컨텍스트를 줄바꿈으로 결합 (둘 다 없으면 None)"""
    contexts = [c for c in (entry_context, app_context) if c]
    if not contexts:
        return None
    return "\n".join(contexts)


def build_prompt(
    text: str,
    source_lang: str,
    target_lang: str,
    context: Optional[str] = None
) -> str:
    """번역 프롬프트 렌더링 (prompts/translator.md)"""
    context_sentence = f" The context is {context}." if context else ""

    prompt = load_prompt(
        "translator",
        source=source_lang,
        target=target_lang,
        context_sentence=context_sentence,
        text=text
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"\n{'='*60}\n"
            f"[Translator] PROMPT ({target_lang})\n"
            f"{'='*60}\n"
            f"{prompt}\n"
            f"{'='*60}"
        )

    return prompt


async def translate(
    task: TranslationTask,
    service: TranslationService
) -> str:
    """
    번역 작업 하나를 수행.

    Args:
        task: 번역 작업 (원문, 언어 쌍, 결합된 컨텍스트)
        service: 번역 백엔드

    Returns:
        번역된 텍스트 (번역 불필요 텍스트는 원문 그대로)

    Raises:
        백엔드 예외를 그대로 전파 (호출자가 실패로 변환)
    """
    text = task.source_text

    if not text or not is_translatable(text):
        return text

    prompt = build_prompt(
        text=text,
        source_lang=task.source_language,
        target_lang=task.language,
        context=task.context
    )

    translation = await service.translate(prompt, fallback=text)

    logger.debug(f"[{task.language}] {text} -> {translation}")

    return translation

"""
Packaged prompts (markdown + YAML frontmatter)

- translator.md: single-string translation request sent to the backend
"""

from .template import (
    PROMPTS_DIR,
    PromptTemplate,
    PromptTemplateLoader,
    get_template_loader,
    load_prompt,
)

__all__ = [
    "PROMPTS_DIR",
    "PromptTemplate",
    "PromptTemplateLoader",
    "get_template_loader",
    "load_prompt",
]

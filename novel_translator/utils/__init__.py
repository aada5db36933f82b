"""Utility functions for LLM creation and prompt handling."""

from novel_translator.utils.llm_factory import clear_cache, create_llm
from novel_translator.utils.prompts import format_prompt, load_prompt

__all__ = ["clear_cache", "create_llm", "format_prompt", "load_prompt"]

"""Prompt loading and formatting.

Prompts are YAML files with ``system`` and ``user`` keys. Lookup order:
1. If prompts_dir specified: prompts_dir/{prompt_name}.yaml
2. Default: PROMPTS_DIR/{prompt_name}.yaml (bundled with the package)
"""

import string
from pathlib import Path

import yaml

from novel_translator.config import PROMPTS_DIR


def resolve_prompt_path(prompt_name: str, prompts_dir: Path | None = None) -> Path:
    """Resolve a prompt name to its YAML file path.

    Args:
        prompt_name: Prompt name like "translate"
        prompts_dir: Directory searched before the bundled prompts

    Returns:
        Path to the YAML file

    Raises:
        FileNotFoundError: If the prompt file doesn't exist
    """
    if prompts_dir is not None:
        yaml_path = Path(prompts_dir) / f"{prompt_name}.yaml"
        if yaml_path.exists():
            return yaml_path

    yaml_path = PROMPTS_DIR / f"{prompt_name}.yaml"
    if yaml_path.exists():
        return yaml_path

    raise FileNotFoundError(f"Prompt not found: {prompt_name}")


def load_prompt(prompt_name: str, prompts_dir: Path | None = None) -> dict:
    """Load a YAML prompt template.

    Returns:
        Dictionary with 'system' and 'user' keys

    Raises:
        FileNotFoundError: If the prompt file doesn't exist
        ValueError: If the prompt has no 'user' template
    """
    path = resolve_prompt_path(prompt_name, prompts_dir=prompts_dir)

    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if "user" not in config:
        raise ValueError(f"Prompt {path} is missing a 'user' template")
    return config


def format_prompt(template: str, variables: dict) -> str:
    """Fill {placeholders} in a template.

    Raises:
        ValueError: If a placeholder has no value
    """
    fields = {name for _, name, _, _ in string.Formatter().parse(template) if name}
    missing = fields - variables.keys()
    if missing:
        raise ValueError(f"Missing prompt variables: {', '.join(sorted(missing))}")
    return template.format(**variables)


__all__ = ["resolve_prompt_path", "load_prompt", "format_prompt"]

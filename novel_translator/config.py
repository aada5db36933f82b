"""Centralized configuration for the novel_translator package.

Provides paths, limits, and environment configuration
used across all modules.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Package root (novel_translator/ directory)
PACKAGE_ROOT = Path(__file__).parent

# Working directory (where the user runs the CLI from)
WORKING_DIR = Path.cwd()

# Load environment variables from current working directory
load_dotenv(WORKING_DIR / ".env")

# Bundled prompt templates ship inside the package
PROMPTS_DIR = PACKAGE_ROOT / "prompts"
OUTPUTS_DIR = WORKING_DIR / "outputs"
DATABASE_PATH = Path(
    os.getenv("NOVEL_TRANSLATOR_DB", str(OUTPUTS_DIR / "history.db"))
)

# Chunking limits
MAX_CHARS = int(os.getenv("NOVEL_TRANSLATOR_MAX_CHARS", "4500"))
MAX_CHUNKS = int(os.getenv("NOVEL_TRANSLATOR_MAX_CHUNKS", "80"))

# LLM Configuration
DEFAULT_PROVIDER = os.getenv("PROVIDER") or "openai"
TRANSLATE_TEMPERATURE = float(os.getenv("TRANSLATE_TEMPERATURE", "0.3"))

# Default models per provider (override with {PROVIDER}_MODEL env var)
# API keys expected in .env: OPENAI_API_KEY, ANTHROPIC_API_KEY
DEFAULT_MODELS = {
    "anthropic": os.getenv("ANTHROPIC_MODEL", "claude-haiku-4-5"),
    "lmstudio": os.getenv("LMSTUDIO_MODEL", "qwen2.5-7b-instruct"),
    "openai": os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
}

# Environment variable holding the key for each provider (None = no key needed)
API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "lmstudio": None,
    "openai": "OPENAI_API_KEY",
}

# Retry Configuration
MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "3"))
RETRY_BASE_DELAY = float(os.getenv("LLM_RETRY_DELAY", "1.0"))  # seconds
RETRY_MAX_DELAY = float(os.getenv("LLM_RETRY_MAX_DELAY", "30.0"))  # seconds

# Article fetching
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "20.0"))  # seconds
USER_AGENT = os.getenv(
    "FETCH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121 Safari/537.36",
)
ACCEPT_LANGUAGE = "ko-KR,ko;q=0.9,en;q=0.8"
PIXIV_BASE_URL = "https://www.pixiv.net"

# Header detection
HEADER_SCAN_LINES = 12
HEADER_BLOCK_MAX_LINES = 6
HEADER_LINE_MAX_CHARS = 40

# History
HISTORY_PAGE_SIZE = 8
DEFAULT_SERIES_TITLE = "패러디소설"
ROOT_FOLDER_LABEL = "전체"

"""HTTP API for translation, extraction and history."""

from novel_translator.api.app import create_app

__all__ = ["create_app"]

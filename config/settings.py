"""Application settings, loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    if settings.ai_available:
        ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5000"))
    )
    max_upload_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_UPLOAD_MB", "10")) * 1024 * 1024
    )

    # ── Extraction ──────────────────────────────────────────────────────────
    #: Characters of syllabus text sent to the model.
    ai_input_chars: int = field(
        default_factory=lambda: int(os.environ.get("AI_INPUT_CHARS", "3000"))
    )
    #: Shortest stripped text worth an AI call.
    ai_min_text_chars: int = 20
    #: Characters of raw PDF text echoed back to the client.
    raw_text_preview_chars: int = 5000

    # ── AI Models ───────────────────────────────────────────────────────────
    extraction_model: str = field(
        default_factory=lambda: os.environ.get("EXTRACTION_MODEL", "claude-haiku-4-5")
    )

    @property
    def ai_available(self) -> bool:
        """True when an Anthropic API key is configured."""
        return bool(self.anthropic_api_key)

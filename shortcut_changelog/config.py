"""Configuration for Shortcut and Gemini access."""

import os

from .shortcut_client.client import DEFAULT_BASE_URL

DEFAULT_MODEL = "gemini-flash-latest"


class ChangelogConfig:
    """Configuration class for the changelog generator."""

    def __init__(
        self,
        shortcut_token: str | None = None,
        gemini_api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize configuration, falling back to environment variables."""
        self.shortcut_token: str | None = shortcut_token or os.getenv(
            "SHORTCUT_TOKEN"
        )
        self.gemini_api_key: str | None = gemini_api_key or os.getenv(
            "GEMINI_API_KEY"
        )
        self.api_url: str = os.getenv("SHORTCUT_API_URL") or DEFAULT_BASE_URL
        self.model: str = model or os.getenv("CHANGELOG_MODEL", DEFAULT_MODEL)

    def is_configured(self) -> bool:
        """Check if both credentials are available."""
        return bool(self.shortcut_token) and bool(self.gemini_api_key)

    def validate(self, require_gemini: bool = True) -> None:
        """Validate configuration and raise error if invalid."""
        missing = []
        if not self.shortcut_token:
            missing.append("SHORTCUT_TOKEN")
        if require_gemini and not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")

        if missing:
            raise ValueError(f"Environment variables required: {', '.join(missing)}")

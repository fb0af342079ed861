"""Configuration from environment variables."""

import os


class Config:
    """Application configuration from environment variables."""

    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Local vault and persisted user settings
    VAULT_PATH: str = os.environ.get("NOTE_SPLITTER_VAULT_PATH", ".")
    SETTINGS_PATH: str = os.environ.get("NOTE_SPLITTER_SETTINGS_PATH", ".note-splitter.json")

    # Remote vault API
    VAULT_API_URL: str = os.environ.get("VAULT_API_URL", "")
    VAULT_API_KEY: str = os.environ.get("VAULT_API_KEY", "")
    HTTP_TIMEOUT_SECONDS: int = int(os.environ.get("HTTP_TIMEOUT_SECONDS", "30"))

    # Command server
    PORT: int = int(os.environ.get("PORT", "8080"))

    def validate(self, remote: bool = False) -> list[str]:
        """Validate required configuration. Returns list of missing items."""
        missing = []
        if remote:
            if not self.VAULT_API_URL:
                missing.append("VAULT_API_URL")
            if not self.VAULT_API_KEY:
                missing.append("VAULT_API_KEY")
        elif not self.VAULT_PATH:
            missing.append("NOTE_SPLITTER_VAULT_PATH")
        return missing


CONFIG = Config()

"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field

from blackjack.rules import RuleSet


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class GameConfig:
    """Table configuration for new games."""

    starting_credits: int = field(
        default_factory=lambda: int(os.getenv("STARTING_CREDITS", "1000"))
    )
    num_decks: int = field(default_factory=lambda: int(os.getenv("NUM_DECKS", "2")))
    reshuffle_threshold: int = field(
        default_factory=lambda: int(os.getenv("RESHUFFLE_THRESHOLD", "30"))
    )

    def to_rules(self) -> RuleSet:
        """Build the engine rule set for these settings."""
        return RuleSet(
            num_decks=self.num_decks,
            reshuffle_threshold=self.reshuffle_threshold,
            starting_credits=self.starting_credits,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()

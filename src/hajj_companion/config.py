from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import (
    DotEnvSettingsSource,
    EnvSettingsSource,
    JsonConfigSettingsSource,
)

from hajj_companion.domain.scoring_weights import ScoringWeights

DEFAULT_APP_DIR = Path(".hajj_companion")
DEFAULT_CONFIG_PATH = DEFAULT_APP_DIR / "config.json"
DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"


class Config(BaseSettings):
    """
    Application configuration loaded from environment variables, .env, and JSON.
    """

    gateway_api_key: Optional[SecretStr] = Field(
        default=None, description="API key for the model gateway."
    )
    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        description="OpenAI-compatible chat completions endpoint.",
    )
    model_name: str = Field(
        default="google/gemini-2.5-flash",
        description="Model identifier sent to the gateway.",
    )
    temperature: Optional[float] = Field(
        default=None, description="Sampling temperature, provider default if unset."
    )
    gateway_timeout_seconds: float = Field(
        default=60.0, gt=0, description="Timeout for gateway requests."
    )
    retrieval_backend: Literal["local", "datastore"] = Field(
        default="local",
        description="Which knowledge retriever backs the chat and search flows.",
    )
    retrieval_limit: int = Field(
        default=3, ge=0, description="Maximum items returned by the local ranker."
    )
    knowledge_path: Optional[Path] = Field(
        default=None,
        description="JSON corpus file; the bundled corpus is used when unset.",
    )
    scoring_weights: ScoringWeights = Field(
        default_factory=ScoringWeights,
        description="Points awarded by the lexical scorer.",
    )
    supabase_url: Optional[str] = Field(
        default=None, description="Base URL of the Supabase project."
    )
    supabase_service_role_key: Optional[SecretStr] = Field(
        default=None, description="Supabase service role key."
    )
    knowledge_table: str = Field(
        default="hajj_knowledge", description="Datastore table holding knowledge rows."
    )
    datastore_row_limit: int = Field(
        default=5, ge=1, description="Maximum rows fetched per datastore search."
    )
    datastore_max_tokens: Optional[int] = Field(
        default=5,
        ge=1,
        description="Maximum query tokens sent per datastore search; None for no cap.",
    )
    datastore_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for datastore requests."
    )
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS."
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    env: str = Field(default="dev", description="Execution environment name.")
    app_dir: Path = Field(
        default=DEFAULT_APP_DIR, description="Root directory for local artifacts."
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="forbid"
    )

    @staticmethod
    def _resolve_relative_path(path: Path, app_dir: Path) -> Path:
        """
        Resolves a relative path by anchoring it under the app directory.

        Args:
            path: The input path to resolve.
            app_dir: The root directory for local artifacts.

        Returns:
            A resolved path under the app directory when relative.
        """
        if path.is_absolute():
            return path

        app_parts = app_dir.parts
        if path.parts[: len(app_parts)] == app_parts:
            return path
        return app_dir / path

    @model_validator(mode="after")
    def _apply_defaults(self) -> "Config":
        """
        Anchors relative paths and checks backend requirements.

        Returns:
            The validated configuration instance.
        """
        if self.knowledge_path is not None:
            self.knowledge_path = self._resolve_relative_path(
                self.knowledge_path, self.app_dir
            )
        if self.retrieval_backend == "datastore":
            if not self.supabase_url:
                raise ValueError(
                    "Supabase URL is required when the datastore backend is enabled."
                )
            if self.supabase_service_role_key is None:
                raise ValueError(
                    "Supabase service role key is required when the datastore "
                    "backend is enabled."
                )
        return self

    @staticmethod
    def _secret_to_str(secret: Optional[SecretStr]) -> Optional[str]:
        """Return the underlying secret value if present."""

        if secret is None:
            return None
        return secret.get_secret_value()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """
        Loads configuration from a JSON file when present.

        Args:
            path: Optional override path for the JSON config file.

        Returns:
            A validated configuration object.
        """
        config_path = path or DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return cls()

        json_source = JsonConfigSettingsSource(cls, json_file=config_path)
        dotenv_source = DotEnvSettingsSource(cls)
        env_source = EnvSettingsSource(cls)
        merged: dict[str, object] = {}
        merged.update(json_source())
        merged.update(dotenv_source())
        merged.update(env_source())
        return cls.model_validate(merged)

    def get_gateway_api_key(self) -> Optional[str]:
        """
        Returns the model gateway API key for runtime usage.

        Returns:
            The gateway API key or None if unset.
        """
        return self._secret_to_str(self.gateway_api_key)

    def get_supabase_service_role_key(self) -> Optional[str]:
        """Returns the Supabase service role key."""

        return self._secret_to_str(self.supabase_service_role_key)

    def get_knowledge_path(self) -> Optional[Path]:
        """Returns the corpus file path, or None for the bundled corpus."""

        return self.knowledge_path

    def get_app_dir(self) -> Path:
        """
        Returns the root directory for local artifacts.

        Returns:
            The app root directory path.
        """
        return self.app_dir

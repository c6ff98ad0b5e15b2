"""Story engine configuration. Env prefix: STORY_."""
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorySettings(BaseSettings):
    """Validation bounds and retry policy for beat generation."""

    model_config = SettingsConfigDict(
        env_prefix="STORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_words: int = Field(default=40, ge=1, description="Minimum segment words (inclusive)")
    max_words: int = Field(default=160, ge=1, description="Maximum segment words (inclusive)")
    retry_on_invalid: bool = Field(default=True, description="One non-streaming retry after a rejected stream")
    extra_blocked_words: list[str] = Field(default_factory=list, description="Appended to the default denylist")

    @model_validator(mode="after")
    def validate_word_band(self) -> "StorySettings":
        if self.min_words > self.max_words:
            raise ValueError("min_words must be <= max_words")
        return self

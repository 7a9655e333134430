"""Configuration settings for alarmbot."""

import re
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alarmbot.errors import ConfigError


class ServerSettings(BaseSettings):
    host: str = Field("0.0.0.0", validation_alias="ALARMBOT_HOST")
    port: int = Field(8092, validation_alias="ALARMBOT_PORT")
    enabled: bool = Field(True, validation_alias="ALARMBOT_SERVER_ENABLED")

class TelegramSettings(BaseSettings):
    bot_token: str = Field("", validation_alias="ALARMBOT_TELEGRAM_BOT_TOKEN")
    api_host: str = Field("api.telegram.org", validation_alias="ALARMBOT_TELEGRAM_API_HOST")
    request_timeout: float = Field(30, validation_alias="ALARMBOT_TELEGRAM_REQUEST_TIMEOUT")
    auto_reply: str = Field(
        "This bot does not interact directly.", validation_alias="ALARMBOT_TELEGRAM_AUTO_REPLY"
    )

class PollSettings(BaseSettings):
    batch_size: int = Field(100, validation_alias="ALARMBOT_BATCH_SIZE")
    updates_idle_interval: float = Field(1, validation_alias="ALARMBOT_UPDATES_IDLE_INTERVAL")
    scrape_idle_interval: float = Field(10, validation_alias="ALARMBOT_SCRAPE_IDLE_INTERVAL")
    # 0 keeps fetch retries flat and immediate; the loop only yields to asyncio
    retry_delay: float = Field(0, validation_alias="ALARMBOT_RETRY_DELAY")
    # negative: a crashed consumer stays down
    restart_delay: float = Field(30, validation_alias="ALARMBOT_RESTART_DELAY")

class FilterSettings(BaseSettings):
    seen_expiry: timedelta = Field(timedelta(hours=24), validation_alias="ALARMBOT_SEEN_EXPIRY")
    max_length: int = Field(150, validation_alias="ALARMBOT_MAX_LENGTH")
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; alarmbot/0.1)", validation_alias="ALARMBOT_USER_AGENT"
    )

class Settings(BaseSettings):
    """Global Application Settings."""
    server: ServerSettings = ServerSettings()
    telegram: TelegramSettings = TelegramSettings()
    poll: PollSettings = PollSettings()
    filters: FilterSettings = FilterSettings()

    sources_path: Path = Field(Path("./data/channels.json"), validation_alias="ALARMBOT_SOURCES_PATH")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore"
    )

settings = Settings()


class SourceConfig(BaseModel):
    """One public channel to watch, as listed in the sources JSON file."""

    name: str
    url: str
    search_regexp: str
    phrases_to_remove: List[str] = Field(default_factory=list)
    to_channel: Union[int, str]
    max_length: Optional[int] = None

    @field_validator("search_regexp")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid search_regexp {value!r}: {e}") from e
        return value


_sources_adapter = TypeAdapter(List[SourceConfig])


def load_sources(path: Union[str, Path]) -> List[SourceConfig]:
    """Load and validate the list of watched channels."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"can't read sources from {path}", e) from e

    try:
        return _sources_adapter.validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid sources in {path}", e) from e

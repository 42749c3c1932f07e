from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VALTEMPLATE_", case_sensitive=False)

    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True

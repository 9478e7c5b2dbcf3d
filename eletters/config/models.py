from pydantic import BaseModel, Field
from typing import Literal


class ProviderSettings(BaseModel):
    provider: Literal["google", "openai"] = "google"
    model: str = "gemini-1.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    max_tokens: int = Field(default=4096, gt=0)
    temperature: float = Field(default=0.4, ge=0, le=2)
    timeout: int = Field(default=30, gt=0)


def _openai_settings() -> ProviderSettings:
    return ProviderSettings(provider="openai", model="gpt-4.1-mini", api_key_env="OPENAI_API_KEY")


class LLMSettings(BaseModel):
    primary: ProviderSettings | None = Field(default_factory=ProviderSettings)
    secondary: ProviderSettings | None = Field(default_factory=_openai_settings)


class RemoteConfig(BaseModel):
    enabled: bool = True
    base_url: str = "http://127.0.0.1:8000"
    timeout: float = Field(default=15.0, gt=0)


class ImporterConfig(BaseModel):
    max_file_size_mb: int = Field(default=10, gt=0)
    layout: Literal["single", "per-question"] = "single"


class StorageConfig(BaseModel):
    path: str = ".eletters/store.json"


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


class ElettersConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    importer: ImporterConfig = Field(default_factory=ImporterConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

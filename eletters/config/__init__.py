from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    ElettersConfig,
    ImporterConfig,
    LLMSettings,
    ProviderSettings,
    RemoteConfig,
    ServerConfig,
    StorageConfig,
)

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "ElettersConfig",
    "ImporterConfig",
    "LLMSettings",
    "ProviderSettings",
    "RemoteConfig",
    "ServerConfig",
    "StorageConfig",
    "load_config",
]

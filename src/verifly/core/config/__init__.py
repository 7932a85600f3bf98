# src/verifly/core/config/__init__.py
"""
Camada de configuração do Verifly.

Responsabilidades do pacote:
    - Leitura da seção `engine` de defaults + overrides locais (YAML/JSON)
    - Validação tipada dessa seção (`EngineSettings`)

Limites explícitos:
    - Não declara callbacks nem grupos
    - Não configura handlers de logging (apenas o nível)
"""

from .errors import (
    ConfigError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .loader import load_settings
from .settings import EngineSettings, configure_logging

__all__ = [
    "ConfigError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "load_settings",
    "EngineSettings",
    "configure_logging",
]

# src/verifly/core/config/settings.py
"""
Configurações efetivas do motor de callbacks.

Lê a seção `engine` da configuração (ver `loader.load_settings`):

    engine:
      cache_resolution: false   # reaproveitar ordem resolvida entre invokes
      log_level: WARNING        # nível do logger `verifly`

Chaves ausentes assumem os defaults abaixo; chaves desconhecidas são
ignoradas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from verifly.core.log import get_logger

from .errors import InvalidSettingError

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


@dataclass(frozen=True)
class EngineSettings:
    cache_resolution: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "EngineSettings":
        engine_cfg = (config or {}).get("engine", {}) or {}
        if not isinstance(engine_cfg, dict):
            raise InvalidSettingError(
                f"Seção 'engine' deve ser dict, recebido: {type(engine_cfg).__name__}"
            )

        cache = engine_cfg.get("cache_resolution", cls.cache_resolution)
        if not isinstance(cache, bool):
            raise InvalidSettingError(f"engine.cache_resolution deve ser bool, recebido: {cache!r}")

        level = str(engine_cfg.get("log_level", cls.log_level)).upper()
        if level not in _LEVELS:
            raise InvalidSettingError(f"engine.log_level inválido: {level}")

        return cls(cache_resolution=cache, log_level=level)


def configure_logging(settings: EngineSettings) -> logging.Logger:
    """Aplica `settings.log_level` ao logger do pacote (sem instalar handlers)."""
    logger = get_logger()
    logger.setLevel(settings.log_level)
    return logger

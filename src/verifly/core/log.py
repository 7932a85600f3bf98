"""
Logger compartilhado do Verifly.

O Verifly é uma biblioteca: não configura handlers nem níveis por conta
própria. O logger raiz do pacote recebe um `NullHandler` (ver
`verifly/__init__.py`), e quem hospeda a aplicação decide o destino das
mensagens. `configure_logging` (em `core.config.settings`) apenas ajusta
o nível a partir da configuração resolvida.
"""

from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "verifly"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class HasLogger:
    """
    Mixin com atributo `logger` e valor padrão para ele.

    Por padrão usa o logger do pacote (`verifly`), que não emite nada
    enquanto a aplicação não instalar handlers. A atribuição
    ``obj.logger = meu_logger`` substitui o logger apenas naquela instância.
    """

    _logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            return get_logger()
        return self._logger

    @logger.setter
    def logger(self, value: logging.Logger) -> None:
        self._logger = value

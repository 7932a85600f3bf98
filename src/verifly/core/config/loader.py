# src/verifly/core/config/loader.py
"""
Loader das configurações do motor de callbacks.

Lê apenas a seção `engine` de um arquivo de defaults (obrigatório) e de
um arquivo local (opcional), sobrepõe as chaves do local às do defaults
e devolve `EngineSettings` já validado:

    engine:
      cache_resolution: true
      log_level: DEBUG

Política de sobreposição:
    - a seção `engine` é plana; cada chave do local substitui a do defaults
    - chave do local sem valor (`log_level:`) mantém o defaults
    - outras seções dos arquivos são ignoradas

Limites explícitos:
    - Não declara callbacks (ações são sempre código)
    - Não configura handlers de logging
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .settings import EngineSettings

_PARSERS: Dict[str, Callable[[Any], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _engine_section(path: Path) -> Dict[str, Any]:
    """
    Extrai a seção `engine` de um arquivo YAML ou JSON.

    Raises:
        UnsupportedConfigFormatError: extensão fora de `_PARSERS`.
        InvalidConfigRootTypeError: documento que não é um mapa.
        InvalidSettingError: seção `engine` que não é um mapa.
    """
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    with path.open("r", encoding="utf-8") as f:
        document = parse(f)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: raiz deve ser dict, recebido: {type(document).__name__}"
        )

    section = document.get("engine")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidSettingError(
            f"{path.name}: seção 'engine' deve ser dict, recebido: {type(section).__name__}"
        )
    return section


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> EngineSettings:
    """
    Resolve as configurações do motor a partir de defaults + local.

    Args:
        defaults_path (str): arquivo base; precisa existir.
        local_path (Optional[str]): overrides; ignorado quando não existe.

    Returns:
        EngineSettings: configurações validadas.

    Raises:
        DefaultsNotFoundError: se o arquivo de defaults não existir.
        ConfigError: demais falhas estruturais ou valores inválidos.
    """
    defaults_file = Path(defaults_path)
    if not defaults_file.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")

    engine = dict(_engine_section(defaults_file))

    if local_path is not None and Path(local_path).exists():
        overrides = _engine_section(Path(local_path))
        engine.update({key: value for key, value in overrides.items() if value is not None})

    return EngineSettings.from_config({"engine": engine})

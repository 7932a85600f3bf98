"""
Verifly — callbacks ordenados por dependência e verificação por regras.

Ponto de entrada público do pacote. O logger `verifly` recebe um
`NullHandler`: nada é emitido até que a aplicação configure handlers.
"""

import logging

from .core.applicator import Applicator
from .core.callbacks import (
    Callback,
    CallbackGroup,
    CallbackRegistry,
    Position,
    new_group,
    resolve_order,
)
from .core.config import EngineSettings, configure_logging, load_settings
from .core.exceptions import (
    CyclicConstraintError,
    DuplicateCallbackNameError,
    IdentityMismatchError,
    InvalidCallbackError,
    VeriflyError,
)
from .core.log import HasLogger
from .core.verifier import Verifier, callback, rule

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Applicator",
    "Callback",
    "CallbackGroup",
    "CallbackRegistry",
    "CyclicConstraintError",
    "DuplicateCallbackNameError",
    "EngineSettings",
    "HasLogger",
    "IdentityMismatchError",
    "InvalidCallbackError",
    "Position",
    "Verifier",
    "VeriflyError",
    "callback",
    "configure_logging",
    "load_settings",
    "new_group",
    "resolve_order",
    "rule",
]

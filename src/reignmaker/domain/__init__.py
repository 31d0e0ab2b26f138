"""Kingdom economy domain for reignmaker.

This package hosts the rules layer. It exposes:

* Dataclasses describing the kingdom ledger (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* Pure consumption calculations and the upkeep ledger mutators.
* Step tracking and phase lifecycle reporting primitives.

Nothing here performs I/O; persistence and orchestration live in
:mod:`reignmaker.repository` and :mod:`reignmaker.services`.
"""

from . import (
    consumption,
    enums,
    lifecycle,
    models,
    rules_config,
    steps,
    upkeep,
)

__all__ = [
    "consumption",
    "enums",
    "lifecycle",
    "models",
    "rules_config",
    "steps",
    "upkeep",
]

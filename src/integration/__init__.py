"""
Pool host layer: config, preconditions and the in-memory pool program
"""

from .amm_program import AmmProgram, Instruction, InstructionKind, ProgramResult
from .config import AmmConfig
from .guards import (
    require_non_zero,
    require_not_expired,
    require_not_locked,
    require_update_authority,
    require_valid_fee,
)

__all__ = [
    "AmmProgram",
    "AmmConfig",
    "Instruction",
    "InstructionKind",
    "ProgramResult",
    "require_non_zero",
    "require_not_expired",
    "require_not_locked",
    "require_update_authority",
    "require_valid_fee",
]

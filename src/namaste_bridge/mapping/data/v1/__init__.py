"""NAMASTE reference dataset v1."""

from namaste_bridge.mapping.data.v1.namc_codes import NAMC_CODES

__all__ = ["NAMC_CODES"]

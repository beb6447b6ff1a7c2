from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class PoolNotFoundError(DomainError):
    """Requested pool does not exist."""


class LiquidityDistributionInputError(DomainError):
    """Invalid parameters for the liquidity distribution."""


class TickArrayLayoutError(DomainError):
    """Tick arrays are misaligned, overlapping or incomplete."""


class LiquidityUnderflowError(DomainError):
    """Running liquidity went negative during the sweep."""


class PoolDataSourceError(DomainError):
    """Pool accounts could not be fetched or decoded."""

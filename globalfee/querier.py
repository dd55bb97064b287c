"""Read-only query service for the global minimum gas prices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from globalfee.coins import DecCoin
from globalfee.params import PARAM_STORE_KEY_MIN_GAS_PRICES


class ParamSource(Protocol):
    """The read-only part of a parameter subspace."""

    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> Any: ...


@dataclass(frozen=True)
class QueryMinimumGasPricesResponse:
    minimum_gas_prices: tuple[DecCoin, ...] = field(default_factory=tuple)


class GrpcQuerier:
    """Answers queries from a parameter source."""

    def __init__(self, param_source: ParamSource) -> None:
        self.param_source = param_source

    def minimum_gas_prices(self, request: Any = None) -> QueryMinimumGasPricesResponse:
        """Return the stored minimum gas prices, or none if unset."""
        prices: tuple[DecCoin, ...] = ()
        if self.param_source.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            stored = self.param_source.get(PARAM_STORE_KEY_MIN_GAS_PRICES)
            prices = tuple(stored or ())
        return QueryMinimumGasPricesResponse(minimum_gas_prices=prices)
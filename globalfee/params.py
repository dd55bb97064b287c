"""Parameters of the global fee module and their validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from globalfee.coins import DecCoin, validate_denom
from globalfee.errors import InvalidCoinsError, InvalidTypeError

PARAM_STORE_KEY_MIN_GAS_PRICES = b"MinimumGasPricesParam"


@dataclass(frozen=True)
class Params:
    """Global minimum gas prices, sorted by denomination."""

    minimum_gas_prices: tuple[DecCoin, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "minimum_gas_prices", tuple(self.minimum_gas_prices))

    def validate_basic(self) -> None:
        """Raise if the minimum gas prices are not valid."""
        validate_minimum_gas_prices(self.minimum_gas_prices)

    def to_dict(self) -> dict[str, Any]:
        return {"minimum_gas_prices": [coin.to_dict() for coin in self.minimum_gas_prices]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Params":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidTypeError(f"params must be an object, got {data!r}")
        prices = data.get("minimum_gas_prices") or []
        if not isinstance(prices, list):
            raise InvalidTypeError(f"minimum_gas_prices must be a list, got {prices!r}")
        return cls(tuple(DecCoin.from_dict(item) for item in prices))


def default_params() -> Params:
    """Return parameters with no minimum gas prices."""
    return Params()


def validate_minimum_gas_prices(value: Any) -> None:
    """Check that ``value`` is a valid sequence of decimal coins."""
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, DecCoin) for item in value
    ):
        raise InvalidTypeError(
            f"type: {type(value).__name__}, expected a sequence of DecCoin"
        )
    validate_dec_coins(value)


def _validate_single(coin: DecCoin) -> None:
    validate_denom(coin.denom)
    if coin.is_negative():
        raise InvalidCoinsError(f"coin {coin} amount is negative")


def validate_dec_coins(coins: Sequence[DecCoin] | Iterable[DecCoin]) -> None:
    """Require sorted, unique, valid denominations and non-negative amounts."""
    coins = list(coins)
    if not coins:
        return
    first, rest = coins[0], coins[1:]
    _validate_single(first)

    low_denom = first.denom
    seen = {low_denom}
    for coin in rest:
        if coin.denom in seen:
            raise InvalidCoinsError(f"duplicate denomination {coin.denom}")
        validate_denom(coin.denom)
        if coin.denom <= low_denom:
            raise InvalidCoinsError(f"denomination {coin.denom} is not sorted")
        if coin.is_negative():
            raise InvalidCoinsError(f"coin {coin.denom} amount is negative")
        low_denom = coin.denom
        seen.add(coin.denom)
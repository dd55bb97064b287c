"""Integer and decimal coins, and helpers for sets of them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from globalfee.errors import InvalidCoinsError

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")

# Number of decimal places used when a decimal amount is written out.
DEC_PRECISION = 18


def validate_denom(denom: str) -> None:
    """Raise InvalidCoinsError unless ``denom`` is a valid denomination."""
    if not isinstance(denom, str) or _DENOM_RE.fullmatch(denom) is None:
        raise InvalidCoinsError(f"invalid denom: {denom}")


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidCoinsError(f"invalid decimal amount: {value!r}") from exc
    if not result.is_finite():
        raise InvalidCoinsError(f"invalid decimal amount: {value!r}")
    return result


@dataclass(frozen=True)
class Coin:
    """A whole-number amount of one denomination."""

    denom: str
    amount: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            try:
                object.__setattr__(self, "amount", int(self.amount))
            except (TypeError, ValueError) as exc:
                raise InvalidCoinsError(f"invalid amount: {self.amount!r}") from exc

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class DecCoin:
    """A decimal amount of one denomination, such as a gas price."""

    denom: str
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": f"{self.amount:.{DEC_PRECISION}f}"}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DecCoin":
        if not isinstance(data, Mapping):
            raise InvalidCoinsError(f"decimal coin must be an object, got {data!r}")
        try:
            denom = data["denom"]
            amount = data["amount"]
        except KeyError as exc:
            raise InvalidCoinsError(f"decimal coin is missing {exc.args[0]!r}") from exc
        if not isinstance(denom, str):
            raise InvalidCoinsError(f"invalid denom: {denom!r}")
        return cls(denom, _to_decimal(amount))

    def __str__(self) -> str:
        return f"{self.amount:.{DEC_PRECISION}f}{self.denom}"


_C = TypeVar("_C", Coin, DecCoin)


def sort_coins(coins: Iterable[_C]) -> list[_C]:
    """Return the coins ordered by denomination."""
    return sorted(coins, key=lambda coin: coin.denom)


def _sanitize(coins: Sequence[_C]) -> list[_C]:
    for coin in coins:
        validate_denom(coin.denom)
        if coin.is_negative():
            raise InvalidCoinsError(f"coin {coin} amount is negative")
    result = sort_coins(coin for coin in coins if not coin.is_zero())
    for previous, current in zip(result, result[1:]):
        if previous.denom == current.denom:
            raise InvalidCoinsError(f"duplicate denomination {current.denom}")
    return result


def new_coins(*args: Coin) -> list[Coin]:
    """Build a valid sorted coin set, dropping zero amounts."""
    return _sanitize(args)


def new_dec_coins(*args: DecCoin) -> list[DecCoin]:
    """Build a valid sorted decimal coin set, dropping zero amounts."""
    return _sanitize(args)


def amount_of(coins: Iterable[Coin | DecCoin], denom: str) -> int | Decimal:
    """Return the amount of ``denom`` in ``coins``, or zero if absent."""
    for coin in coins:
        if coin.denom == denom:
            return coin.amount
    return 0
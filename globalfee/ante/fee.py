"""Ante decorator that enforces global and local minimum fees on transactions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, Protocol, Sequence

from globalfee.ante.fee_utils import (
    combined_fee_requirement,
    denoms_subset_of_including_zero,
    is_any_gte_including_zero,
)
from globalfee.coins import Coin, DecCoin, sort_coins, validate_denom
from globalfee.errors import GlobalFeeError, InsufficientFeeError, TxDecodeError
from globalfee.params import PARAM_STORE_KEY_MIN_GAS_PRICES

# Key under which the staking module stores its bond denomination.
KEY_BOND_DENOM = b"BondDenom"


class Subspace(Protocol):
    """The parts of a parameter subspace the decorator relies on."""

    def has_key_table(self) -> bool: ...

    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> Any: ...


@dataclass(frozen=True)
class Context:
    """Execution context of a transaction check."""

    min_gas_prices: tuple[DecCoin, ...] = field(default_factory=tuple)
    is_check_tx: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_gas_prices", tuple(self.min_gas_prices))


@dataclass(frozen=True)
class FeeTx:
    """A transaction carrying a fee, a gas limit and messages.

    Messages are given by their type URL, or as objects with a ``type_url``.
    """

    fee: tuple[Coin, ...] = field(default_factory=tuple)
    gas: int = 0
    msgs: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fee", tuple(self.fee))
        object.__setattr__(self, "msgs", tuple(self.msgs))


AnteHandler = Callable[[Context, Any, bool], Any]


def _required_fees(prices: Iterable[DecCoin], gas: int) -> list[Coin]:
    """fee = ceil(price * gas) for each price, sorted by denomination."""
    gas_dec = Decimal(gas)
    fees = []
    for price in prices:
        validate_denom(price.denom)
        fees.append(Coin(price.denom, math.ceil(price.amount * gas_dec)))
    return sort_coins(fees)


def get_min_gas_price(ctx: Context, fee_tx: FeeTx) -> list[Coin]:
    """Return the local minimum fees for ``fee_tx``, sorted; empty if all prices are zero."""
    if all(price.is_zero() for price in ctx.min_gas_prices):
        return []
    return _required_fees(ctx.min_gas_prices, fee_tx.gas)


def _format_coins(coins: Sequence[Coin]) -> str:
    return ",".join(str(coin) for coin in coins)


def _type_url(msg: Any) -> str:
    return msg if isinstance(msg, str) else msg.type_url


class FeeDecorator:
    """Rejects CheckTx transactions whose fee is below the global or local minimum.

    Transactions made only of bypass message types, within a gas budget, may
    pay no fee; if they do pay, the fee denominations must be global fee ones.
    """

    def __init__(
        self,
        bypass_min_fee_msg_types: Sequence[str],
        global_min_fee: Subspace,
        staking_subspace: Subspace,
        max_bypass_min_fee_msg_gas_usage: int,
    ) -> None:
        if not global_min_fee.has_key_table():
            raise GlobalFeeError("global fee paramspace was not set up via module")
        if not staking_subspace.has_key_table():
            raise GlobalFeeError("staking paramspace was not set up via module")
        self.bypass_min_fee_msg_types = list(bypass_min_fee_msg_types)
        self.global_min_fee = global_min_fee
        self.staking_subspace = staking_subspace
        self.max_bypass_min_fee_msg_gas_usage = max_bypass_min_fee_msg_gas_usage

    def ante_handle(
        self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler
    ) -> Any:
        """Check the fee of ``tx`` and pass it on to ``next_handler``.

        Raises TxDecodeError if ``tx`` is not a FeeTx and InsufficientFeeError
        if the fee does not meet the requirements.
        """
        if not isinstance(tx, FeeTx):
            raise TxDecodeError("Tx must be a FeeTx")
        fee_coins = sort_coins(tx.fee)
        msgs = tx.msgs

        allowed_to_bypass = self.bypass_min_fee_msgs(msgs) and (
            tx.gas <= len(msgs) * self.max_bypass_min_fee_msg_gas_usage
        )

        required_global_fees = self._get_global_fee(ctx, tx)
        required_fees = get_min_gas_price(ctx, tx)

        if not ctx.is_check_tx or simulate:
            return next_handler(ctx, tx, simulate)

        if not allowed_to_bypass:
            all_fees = combined_fee_requirement(required_global_fees, required_fees)
            if not denoms_subset_of_including_zero(fee_coins, all_fees):
                raise InsufficientFeeError(
                    "fee is not a subset of required fees; "
                    f"got {_format_coins(fee_coins)}, required: {_format_coins(all_fees)}"
                )
            if not is_any_gte_including_zero(fee_coins, all_fees):
                raise InsufficientFeeError(
                    f"insufficient fees; got: {_format_coins(fee_coins)} "
                    f"required: {_format_coins(all_fees)}"
                )
        else:
            if not fee_coins:
                return next_handler(ctx, tx, simulate)
            if not denoms_subset_of_including_zero(fee_coins, required_global_fees):
                raise InsufficientFeeError(
                    f"fees denom is wrong; got: {_format_coins(fee_coins)} "
                    f"required: {_format_coins(required_global_fees)}"
                )

        return next_handler(ctx, tx, simulate)

    def _get_global_fee(self, ctx: Context, fee_tx: FeeTx) -> list[Coin]:
        prices: Sequence[DecCoin] = ()
        if self.global_min_fee.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            prices = self.global_min_fee.get(PARAM_STORE_KEY_MIN_GAS_PRICES) or ()
        if not prices:
            prices = self.default_zero_global_fee(ctx)
        return _required_fees(prices, fee_tx.gas)

    def default_zero_global_fee(self, ctx: Context) -> list[DecCoin]:
        """Return a zero fee in the staking bond denomination."""
        bond_denom = self._get_bond_denom()
        if not bond_denom:
            raise GlobalFeeError("empty staking bond denomination")
        return [DecCoin(bond_denom, Decimal(0))]

    def _get_bond_denom(self) -> str:
        if self.staking_subspace.has(KEY_BOND_DENOM):
            return self.staking_subspace.get(KEY_BOND_DENOM) or ""
        return ""

    def bypass_min_fee_msgs(self, msgs: Iterable[Any]) -> bool:
        """Return True if every message is of a bypass type."""
        return all(_type_url(msg) in self.bypass_min_fee_msg_types for msg in msgs)
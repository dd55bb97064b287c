"""Comparisons between fee coin sets that treat zero amounts as meaningful.

A global fee may list a denomination with a zero amount: the chain then
accepts that denomination without asking for a minimum fee in it. The
helpers here differ from the usual coin-set operations in exactly that
respect.
"""

from __future__ import annotations

from typing import Sequence

from globalfee.coins import Coin, amount_of, sort_coins, validate_denom

MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)


def find(coins: Sequence[Coin], denom: str) -> Coin | None:
    """Binary-search ``coins``, sorted by denomination, for ``denom``.

    Returns the coin, or None when the denomination is absent.
    """
    lo, hi = 0, len(coins)
    while hi - lo > 1:
        mid = lo + (hi - lo) // 2
        coin = coins[mid]
        if denom < coin.denom:
            hi = mid
        elif denom == coin.denom:
            return coin
        else:
            lo = mid + 1
    if hi - lo == 1 and coins[lo].denom == denom:
        return coins[lo]
    return None


def contain_zero_coins(coins_b: Sequence[Coin]) -> bool:
    """Return True if ``coins_b`` is empty or holds a coin of zero amount."""
    if not coins_b:
        return True
    return any(coin.is_zero() for coin in coins_b)


def denoms_subset_of_including_zero(
    coins: Sequence[Coin], coins_b: Sequence[Coin]
) -> bool:
    """Return True if every denomination of ``coins`` appears in ``coins_b``.

    An empty ``coins`` counts as a subset of any set that holds a zero coin.
    Raises InvalidCoinsError if a denomination in ``coins`` is malformed.
    """
    if len(coins) > len(coins_b):
        return False
    if not coins and contain_zero_coins(coins_b):
        return True
    for coin in coins:
        validate_denom(coin.denom)
        if find(coins_b, coin.denom) is None:
            return False
    return True


def is_any_gte_including_zero(coins: Sequence[Coin], coins_b: Sequence[Coin]) -> bool:
    """Return True if some coin in ``coins`` meets the amount of its denomination in ``coins_b``.

    Two empty sets compare as True; nothing meets an empty ``coins_b``
    otherwise. An empty ``coins`` passes only if ``coins_b`` holds a zero coin.
    Both sets must be sorted by denomination.
    """
    if not coins_b:
        return not coins
    if not coins:
        return contain_zero_coins(coins_b)
    for coin in coins:
        if find(coins_b, coin.denom) is not None:
            if coin.amount >= amount_of(coins_b, coin.denom):
                return True
    return False


def combined_fee_requirement(
    global_fees: Sequence[Coin], min_gas_prices: Sequence[Coin]
) -> list[Coin]:
    """Merge global fees with local minimum fees.

    For each global fee denomination the higher of the two amounts is kept;
    local denominations absent from the global fees are ignored. Inputs are
    not validated, so the result may hold zero coins.
    """
    if not min_gas_prices or not global_fees:
        return list(global_fees)
    combined = []
    for fee in global_fees:
        local = find(min_gas_prices, fee.denom)
        if local is not None and local.amount > fee.amount:
            combined.append(local)
        else:
            combined.append(fee)
    return sort_coins(combined)


def get_tx_priority(fee: Sequence[Coin]) -> int:
    """Return a naive priority: the smallest fee amount, capped to a signed 64-bit integer."""
    priority = 0
    for coin in fee:
        amount = coin.amount
        p = amount if MIN_INT64 <= amount <= MAX_INT64 else MAX_INT64
        if priority == 0 or p < priority:
            priority = p
    return priority
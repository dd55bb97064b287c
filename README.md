# globalfee

This package enforces chain-wide minimum fee rules for transactions. It
provides the following:

- parameters that hold the global minimum gas prices;
- genesis state that reads and writes those parameters as JSON;
- an in-memory parameter store and a query service for the stored prices;
- a fee decorator that rejects any transaction whose fee falls short of the
  combined global fee and the node's own minimum gas prices.

The package has no dependencies outside the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Coins

`globalfee.coins` defines two coin types:

- `Coin` carries an integer amount.
- `DecCoin` carries a `Decimal` amount, such as a gas price. It offers
  `to_dict()` and `from_dict()`.

It also provides these helpers:

- `new_coins(...)` and `new_dec_coins(...)` validate the coins they are given
  and return them sorted by denomination. They drop zero amounts. They raise
  `InvalidCoinsError` for a bad denomination, a negative amount or a
  duplicate denomination.
- `sort_coins(coins)` sorts coins by denomination.
- `amount_of(coins, denom)` returns the amount of `denom` in `coins`, or zero
  if `denom` is absent.
- `validate_denom(denom)` raises `InvalidCoinsError` unless the denomination
  is 3 to 128 characters long, starts with a letter, and continues with
  letters, digits or `/:._-`.

## Parameters and genesis

`globalfee.params.Params` holds `minimum_gas_prices`, a tuple of `DecCoin`.
`validate_dec_coins` and `Params.validate_basic()` accept the prices only if
they meet all of these conditions:

- they are sorted by denomination;
- every denomination is unique and valid;
- every amount is non-negative.

Zero amounts are allowed.

```python
from globalfee.genesis import GenesisState, default_genesis_state, validate_genesis

state = GenesisState.from_json(
    '{"params":{"minimum_gas_prices":[{"denom":"ALX","amount":"1"}]}}'
)
validate_genesis(state)                  # raises on duplicate, unsorted or negative prices
print(default_genesis_state().to_json())  # {"params": {"minimum_gas_prices": []}}
```

`genesis_state_from_app_state(app_state)` reads the `"globalfee"` entry of a
mapping of raw application state. If that entry is missing, it returns an
empty state.

## Module, store and queries

`globalfee.module` provides three classes:

- `ParamSubspace` is an in-memory parameter store. A key table maps each key
  to the validator that its values must pass. `with_key_table()` returns a
  subspace that uses the global fee key table and shares the same storage.
- `AppModuleBasic` supplies the default genesis JSON and validates genesis
  JSON.
- `AppModule` wraps a subspace. `init_genesis` stores the genesis parameters
  and `export_genesis` writes them back out as JSON.

`globalfee.querier.GrpcQuerier` reads from any object that has `has` and `get`
methods. `minimum_gas_prices()` returns a `QueryMinimumGasPricesResponse`. It
holds the stored prices, or an empty tuple if none are set.

## Fee checks

`globalfee.ante.fee_utils` holds the coin-set comparisons. These comparisons
treat a zero amount in the global fee as "this denomination is accepted with
no minimum":

- `denoms_subset_of_including_zero(coins, coins_b)`
- `is_any_gte_including_zero(coins, coins_b)`
- `contain_zero_coins(coins_b)`
- `combined_fee_requirement(global_fees, min_gas_prices)` keeps the higher
  amount for each global fee denomination.
- `get_tx_priority(fee)` returns the smallest fee amount, capped at the
  largest signed 64-bit integer.
- `find(coins, denom)` runs a binary search over sorted coins and returns the
  coin it finds or `None`.

`globalfee.ante.fee.FeeDecorator` checks a `FeeTx` in a `Context`. The
required fee for each gas price is `ceil(price * gas)`. If no global prices
are stored, the decorator requires a zero fee in the staking bond
denomination instead. It reads that denomination from the staking subspace
under `KEY_BOND_DENOM`.

```python
from decimal import Decimal

from globalfee.ante.fee import KEY_BOND_DENOM, Context, FeeDecorator, FeeTx
from globalfee.coins import Coin, DecCoin, validate_denom
from globalfee.module import ParamSubspace
from globalfee.params import Params

global_space = ParamSubspace().with_key_table()
global_space.set_param_set(Params((DecCoin("uatom", Decimal("0.001")),)))

staking_space = ParamSubspace("staking", key_table={KEY_BOND_DENOM: validate_denom})
staking_space.set(KEY_BOND_DENOM, "uatom")

decorator = FeeDecorator(["/ibc.core.channel.v1.MsgRecvPacket"], global_space, staking_space, 200000)
ctx = Context(is_check_tx=True)
tx = FeeTx(fee=(Coin("uatom", 200),), gas=200000, msgs=("/example.MsgSend",))
decorator.ante_handle(ctx, tx, False, lambda ctx, tx, simulate: ctx)
```

The decorator passes a transaction straight to the next handler without any
fee check in two cases:

- the context is not a check (`is_check_tx` is false);
- `simulate` is true.

Otherwise, a transaction may pay no fee if both of these hold:

- every message is one of the bypass type URLs;
- its gas is no more than the number of messages times the bypass gas limit.

If such a transaction does pay a fee, every fee denomination must be one of
the global fee denominations.

The decorator raises these errors:

- `TxDecodeError` if the transaction is not a `FeeTx`.
- `InsufficientFeeError` if the fee is rejected.
- `GlobalFeeError` if no bond denomination is available when one is needed.

All of these errors are defined in `globalfee.errors`.

## What this package does not do

It has no command-line tool. It runs no network query server:
`GrpcQuerier` answers calls in-process. Its parameter store lives in memory
only and is not saved anywhere.
"""Application module wiring for the global fee parameters."""

from __future__ import annotations

from typing import Any, Callable, Mapping, MutableMapping

from globalfee.errors import GlobalFeeError
from globalfee.genesis import MODULE_NAME, QUERIER_ROUTE, GenesisState
from globalfee.params import (
    PARAM_STORE_KEY_MIN_GAS_PRICES,
    Params,
    default_params,
    validate_minimum_gas_prices,
)

Validator = Callable[[Any], None]

_GLOBALFEE_KEY_TABLE: Mapping[bytes, Validator] = {
    PARAM_STORE_KEY_MIN_GAS_PRICES: validate_minimum_gas_prices,
}


def _as_key(key: bytes | str) -> bytes:
    return key.encode() if isinstance(key, str) else bytes(key)


def _freeze(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value


class ParamSubspace:
    """An in-memory parameter store for one module.

    A key table maps each registered key to the validator its values must pass.
    Subspaces derived with :meth:`with_key_table` share the same storage.
    """

    def __init__(
        self,
        name: str = MODULE_NAME,
        key_table: Mapping[bytes, Validator] | None = None,
        store: MutableMapping[bytes, Any] | None = None,
    ) -> None:
        self.name = name
        self._key_table = (
            None if key_table is None else {_as_key(k): v for k, v in key_table.items()}
        )
        self._store: MutableMapping[bytes, Any] = {} if store is None else store

    def has_key_table(self) -> bool:
        return self._key_table is not None

    def with_key_table(self) -> "ParamSubspace":
        """Return a subspace sharing this storage, with the global fee key table."""
        if self.has_key_table():
            raise GlobalFeeError(f"subspace {self.name} already has a key table")
        return ParamSubspace(self.name, _GLOBALFEE_KEY_TABLE, self._store)

    def has(self, key: bytes | str) -> bool:
        return _as_key(key) in self._store

    def get(self, key: bytes | str) -> Any:
        key = _as_key(key)
        try:
            return self._store[key]
        except KeyError:
            raise KeyError(f"parameter {key!r} is not set in subspace {self.name}") from None

    def set(self, key: bytes | str, value: Any) -> None:
        """Validate ``value`` against the key table and store it."""
        key = _as_key(key)
        if self._key_table is None:
            raise GlobalFeeError(f"subspace {self.name} has no key table")
        try:
            validator = self._key_table[key]
        except KeyError:
            raise GlobalFeeError(
                f"parameter {key!r} is not registered in subspace {self.name}"
            ) from None
        value = _freeze(value)
        validator(value)
        self._store[key] = value

    def set_param_set(self, params: Params) -> None:
        self.set(PARAM_STORE_KEY_MIN_GAS_PRICES, params.minimum_gas_prices)

    def get_param_set(self) -> Params:
        return Params(minimum_gas_prices=self.get(PARAM_STORE_KEY_MIN_GAS_PRICES))


class AppModuleBasic:
    """Stateless parts of the module: name and genesis handling."""

    def name(self) -> str:
        return MODULE_NAME

    def default_genesis(self) -> str:
        return GenesisState(params=default_params()).to_json()

    def validate_genesis(self, message: str | bytes) -> None:
        """Raise if ``message`` is not a valid genesis state."""
        data = GenesisState.from_json(message)
        try:
            data.params.validate_basic()
        except GlobalFeeError as exc:
            raise type(exc)(f"params: {exc}") from exc


class AppModule(AppModuleBasic):
    """The module bound to its parameter subspace."""

    def __init__(self, param_space: ParamSubspace) -> None:
        if not param_space.has_key_table():
            param_space = param_space.with_key_table()
        self.param_space = param_space

    def init_genesis(self, message: str | bytes) -> list[Any]:
        """Store the parameters from the genesis message; no validator updates."""
        state = GenesisState.from_json(message)
        self.param_space.set_param_set(state.params)
        return []

    def export_genesis(self) -> str:
        return GenesisState(params=self.param_space.get_param_set()).to_json()

    def querier_route(self) -> str:
        return QUERIER_ROUTE

    def consensus_version(self) -> int:
        return 1
"""Genesis state of the global fee module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from globalfee.errors import GlobalFeeError
from globalfee.params import Params, default_params

MODULE_NAME = "globalfee"
QUERIER_ROUTE = MODULE_NAME


@dataclass(frozen=True)
class GenesisState:
    """The module's state at chain start."""

    params: Params = field(default_factory=Params)

    def to_json(self) -> str:
        return json.dumps({"params": self.params.to_dict()})

    @classmethod
    def from_json(cls, raw: str | bytes) -> "GenesisState":
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise GlobalFeeError(f"invalid genesis json: {exc}") from exc
        if not isinstance(data, dict):
            raise GlobalFeeError("genesis state must be a JSON object")
        return cls(Params.from_dict(data.get("params")))


def new_genesis_state(params: Params) -> GenesisState:
    return GenesisState(params=params)


def default_genesis_state() -> GenesisState:
    return new_genesis_state(default_params())


def genesis_state_from_app_state(app_state: Mapping[str, Any]) -> GenesisState:
    """Read this module's genesis state from the raw application state."""
    raw = app_state.get(MODULE_NAME)
    if raw is None:
        return GenesisState()
    return GenesisState.from_json(raw)


def validate_genesis(data: GenesisState) -> None:
    """Raise if the genesis parameters are not valid."""
    try:
        data.params.validate_basic()
    except GlobalFeeError as exc:
        raise type(exc)(f"globalfee params: {exc}") from exc
"""
Process-wide ledger configuration.

The fee rate is read at swap time, not locked into pools at creation, so a
host that reloads configuration changes the price of every subsequent swap.

Configuration sources, later wins:
1. `DexConfig` defaults
2. a YAML file (`load_config(path)`)
3. environment variables `PAIRDEX_ADMIN`, `PAIRDEX_FEE_RATE`,
   `PAIRDEX_NATIVE_DENOMS` (comma-separated)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from ..state.assets import DEFAULT_NATIVE_DENOMS


BPS_DENOM = 10_000
MAX_FEE_RATE = BPS_DENOM - 1

_CONFIG_KEYS = ("admin", "fee_rate", "native_denoms")


@dataclass(frozen=True)
class DexConfig:
    """Runtime config for the ledger."""

    admin: str = ""
    # Basis points, [0, 10_000).
    fee_rate: int = 30
    native_denoms: Tuple[str, ...] = field(default=DEFAULT_NATIVE_DENOMS)

    def __post_init__(self) -> None:
        if not isinstance(self.admin, str):
            raise TypeError("admin must be a string")
        if not isinstance(self.fee_rate, int) or isinstance(self.fee_rate, bool):
            raise TypeError("fee_rate must be an int")
        if not (0 <= self.fee_rate < BPS_DENOM):
            raise ValueError(f"fee_rate must be in [0, {BPS_DENOM}): {self.fee_rate}")
        denoms = tuple(self.native_denoms)
        if not denoms:
            raise ValueError("native_denoms must not be empty")
        for d in denoms:
            if not isinstance(d, str) or not d.strip():
                raise ValueError("native_denoms entries must be non-empty strings")
        object.__setattr__(self, "native_denoms", tuple(d.strip() for d in denoms))


def _env_int(env: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _parse_denoms(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value]
    else:
        raise ValueError("native_denoms must be a list or a comma-separated string")
    return tuple(item for item in items if item)


def config_from_mapping(data: Mapping[str, Any], base: DexConfig = DexConfig()) -> DexConfig:
    """Overlay a plain mapping (e.g. decoded YAML) on `base`. Unknown keys are rejected."""
    if not isinstance(data, Mapping):
        raise ValueError("config must be a mapping")
    unknown = sorted(set(data) - set(_CONFIG_KEYS))
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")

    updates: dict[str, Any] = {}
    if "admin" in data:
        updates["admin"] = str(data["admin"])
    if "fee_rate" in data:
        fee_rate = data["fee_rate"]
        if not isinstance(fee_rate, int) or isinstance(fee_rate, bool):
            raise ValueError("fee_rate must be an integer number of basis points")
        updates["fee_rate"] = fee_rate
    if "native_denoms" in data:
        updates["native_denoms"] = _parse_denoms(data["native_denoms"])
    return replace(base, **updates)


def config_from_env(base: DexConfig = DexConfig(), env: Optional[Mapping[str, str]] = None) -> DexConfig:
    """Apply `PAIRDEX_*` overrides. Out-of-range fee rates are clamped to [0, 9999]."""
    env = os.environ if env is None else env
    denoms_raw = _env_str(env, "PAIRDEX_NATIVE_DENOMS", "")
    return replace(
        base,
        admin=_env_str(env, "PAIRDEX_ADMIN", base.admin),
        fee_rate=_env_int(env, "PAIRDEX_FEE_RATE", base.fee_rate, lo=0, hi=MAX_FEE_RATE),
        native_denoms=_parse_denoms(denoms_raw) if denoms_raw else base.native_denoms,
    )


def load_config(
    path: Optional[Union[str, Path]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> DexConfig:
    """
    Build a `DexConfig` from an optional YAML file plus environment overrides.

    Raises:
        ValueError: If the YAML document is not a mapping or holds invalid values
    """
    config = DexConfig()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if data is None:
            data = {}
        config = config_from_mapping(data, config)
    return config_from_env(config, env)

"""
Shamir-VSS — Configuration
============================

Sharing parameters, read from the environment:

  SHAMIR_VSS_THRESHOLD     t — shares needed to reconstruct   (default 3)
  SHAMIR_VSS_TOTAL_SHARES  n — shares issued per split        (default 5)
  SHAMIR_VSS_FIELD         SSS prime preset name              (default mersenne521)
  SHAMIR_VSS_GROUP_BITS    bit length of generated VSS group  (default 2048)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError
from .field import resolve_field


ENV_PREFIX = "SHAMIR_VSS_"


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from None


@dataclass(frozen=True)
class SharingConfig:
    """Static parameters shared by both schemes."""
    threshold: int = 3            # t
    total_shares: int = 5         # n
    field: str = "mersenne521"    # SSS modulus preset
    group_bits: int = 2048        # Feldman group size when generated

    @property
    def prime(self) -> int:
        return resolve_field(self.field)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SharingConfig":
        environ = os.environ if environ is None else environ
        field = environ.get(ENV_PREFIX + "FIELD") or cls.field
        config = cls(
            threshold=_int_env(environ, "THRESHOLD", cls.threshold),
            total_shares=_int_env(environ, "TOTAL_SHARES", cls.total_shares),
            field=field,
            group_bits=_int_env(environ, "GROUP_BITS", cls.group_bits),
        )
        # Fail early on an unknown preset.
        resolve_field(config.field)
        return config

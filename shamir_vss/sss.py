"""
Shamir-VSS — Shamir's Secret Sharing over GF(p)
=================================================

Split an integer secret into N shares so that any K reconstruct it and
any K−1 reveal nothing about it.

ALGORITHM:
  Split(secret, K, N):
    1. Random polynomial f(x) of degree K−1 with f(0) = secret mod p
    2. Shares = { (x, f(x)) for x = 1..N }   (never x = 0: f(0) IS the secret)

  Reconstruct(shares):
    1. Fewer than K shares → absent result (None)
    2. Take the FIRST K shares of the supplied sequence, in order
    3. Lagrange-interpolate f(0)

FIELD:
  Default modulus is the Mersenne prime 2^521 − 1, so any secret below
  2^521 − 1 survives the round trip unchanged. Larger secrets are reduced
  mod p. Other prime presets are available through ``field.FIELD_PRESETS``.

POSITIONAL SELECTION:
  Reconstruction never searches for a working subset. Callers that hold
  more than K shares choose which K go first.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .audit_log import AuditLog
from .config import SharingConfig
from .errors import ConfigurationError, DomainError, ReconstructionFailure
from .field import (
    MERSENNE_521,
    RandomSource,
    default_random_source,
    evaluate_polynomial,
    interpolate_at_zero,
    random_polynomial,
)


@dataclass(frozen=True)
class Share:
    """
    A single Shamir share — a point (x, y) on the secret polynomial.

    - x = evaluation point (1..N)
    - y = f(x) mod p
    """
    x: int
    y: int


def validate_threshold(threshold: int, total_shares: int) -> None:
    """Enforce 1 ≤ threshold ≤ total_shares."""
    if threshold < 1:
        raise ConfigurationError("Threshold must be >= 1")
    if threshold > total_shares:
        raise ConfigurationError(
            "Threshold must be less than or equal to total shares"
        )


class SecretSharer:
    """
    K-of-N Shamir sharing over a fixed prime field.

    The instance holds only immutable parameters and can be reused for any
    number of splits and reconstructions. The random source is injectable,
    per instance or per ``split_secret`` call.
    """

    SOURCE = "sss"

    def __init__(
        self,
        threshold: int,
        total_shares: int,
        prime: int = MERSENNE_521,
        rng: Optional[RandomSource] = None,
        audit_log: Optional[AuditLog] = None,
    ):
        validate_threshold(threshold, total_shares)
        self._prime = prime
        self._threshold = threshold
        self._total_shares = total_shares
        self._rng = rng
        self._audit = audit_log

    @classmethod
    def from_config(
        cls,
        config: SharingConfig,
        rng: Optional[RandomSource] = None,
        audit_log: Optional[AuditLog] = None,
    ) -> "SecretSharer":
        return cls(
            config.threshold,
            config.total_shares,
            prime=config.prime,
            rng=rng,
            audit_log=audit_log,
        )

    @property
    def prime(self) -> int:
        return self._prime

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def total_shares(self) -> int:
        return self._total_shares

    # ──────────────── Split ────────────────

    def split_secret(self, secret: int, rng: Optional[RandomSource] = None) -> List[Share]:
        """
        Split *secret* into ``total_shares`` points at x = 1..N.

        Raises ``DomainError`` for a negative secret.
        """
        if secret < 0:
            self._log("split_rejected", reason="negative_secret")
            raise DomainError("Secret must be non-negative")

        source = rng or self._rng or default_random_source()
        coefficients = random_polynomial(secret, self._threshold, self._prime, source)

        shares = [
            Share(x=x, y=evaluate_polynomial(coefficients, x, self._prime))
            for x in range(1, self._total_shares + 1)
        ]
        self._log(
            "split",
            threshold=self._threshold,
            total_shares=self._total_shares,
            issued=len(shares),
        )
        return shares

    # ──────────────── Reconstruct ────────────────

    def reconstruct_secret(self, shares: Sequence[Share]) -> Optional[int]:
        """
        Recover f(0) from the first ``threshold`` shares.

        Returns None when fewer than ``threshold`` shares are supplied or
        when the selected coordinates are duplicated or zero.
        """
        if len(shares) < self._threshold:
            self._log(
                "reconstruct_failed",
                reason="insufficient_shares",
                supplied=len(shares),
            )
            return None

        selected = shares[:self._threshold]
        try:
            secret = interpolate_at_zero([(s.x, s.y) for s in selected], self._prime)
        except ReconstructionFailure:
            self._log(
                "reconstruct_failed",
                reason="singular_denominator",
                supplied=len(shares),
            )
            return None

        self._log("reconstruct", supplied=len(shares), used=len(selected))
        return secret

    # ──────────────── Internal ────────────────

    def _log(self, event: str, **details) -> None:
        if self._audit is not None:
            self._audit.record(self.SOURCE, event, **details)

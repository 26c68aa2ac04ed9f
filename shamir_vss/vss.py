"""
Shamir-VSS — Feldman Verifiable Secret Sharing
================================================

Shamir sharing over GF(q) plus public commitments to the polynomial
coefficients, so each share-holder can check their share against the
dealer's polynomial without learning the secret.

GROUP:
  - p: prime modulus of the commitment group
  - q: prime order of the subgroup generated by g  (q | p − 1)
  - g: generator of that subgroup
  Shares, coefficients and exponents live mod q; commitments live mod p.

ALGORITHM:
  Split(secret):
    1. Reject secret ∉ [0, q)
    2. Random polynomial f over GF(q), f(0) = secret
    3. Commitments Cᵢ = g^{cᵢ} mod p   for every coefficient cᵢ
    4. Shares (id, f(id)) for id = 1..N

  Verify(share, C):
    Π_i Cᵢ^{(id^i mod q)} mod p  ==  g^{value} mod p
    Holds iff the share lies on the committed polynomial, because
    g^{f(id)} = Π g^{cᵢ · idⁱ}.

  Reconstruct(shares):
    Lagrange interpolation at 0 over GF(q) using the first K shares.

SECURITY RATIONALE:
  - Binding rests on discrete-log hardness in ⟨g⟩ ⊂ Z_p*.
  - Commitments reveal g^{secret}; the secret itself stays hidden only
    computationally (unlike plain Shamir).
  - ``generate_group_parameters`` obtains (p, q, g) from the
    ``cryptography`` package's DSA parameter generator (FIPS 186-4
    construction), which yields exactly such a prime-order subgroup.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from cryptography.hazmat.primitives.asymmetric import dsa

from .audit_log import AuditLog
from .config import SharingConfig
from .errors import ConfigurationError, DomainError, ReconstructionFailure
from .field import (
    GroupElement,
    RandomSource,
    Scalar,
    default_random_source,
    evaluate_polynomial,
    interpolate_at_zero,
    random_polynomial,
)
from .sss import validate_threshold


SUPPORTED_GROUP_SIZES = (1024, 2048, 3072, 4096)


# ────────────────────────────────────────────────────────────
#  Data Structures
# ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class VSSShare:
    """A share (id, f(id) mod q)."""
    id: int
    value: Scalar


@dataclass(frozen=True)
class Commitment:
    """Public commitment vector: ``values[i] = g^{cᵢ} mod p``."""
    values: Tuple[GroupElement, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[GroupElement]:
        return iter(self.values)

    def __getitem__(self, index: int) -> GroupElement:
        return self.values[index]


@dataclass(frozen=True)
class GroupParameters:
    """Schnorr group (p, q, g)."""
    p: int
    q: int
    g: int


def check_group_parameters(p: int, q: int, g: int) -> bool:
    """
    Structural check of a commitment group.

    True when q divides p − 1 and g is a non-trivial element of order
    dividing q (for prime q: exactly q). Primality of p and q is not tested.
    """
    if p < 3 or q < 2:
        return False
    if (p - 1) % q != 0:
        return False
    if not 1 < g < p:
        return False
    return pow(g, q, p) == 1


def generate_group_parameters(key_size: int = 2048) -> GroupParameters:
    """
    Generate a fresh (p, q, g) with ``key_size``-bit p.

    Uses DSA domain parameter generation; q is 160 bits for 1024-bit p and
    224 or 256 bits for the larger sizes.
    """
    if key_size not in SUPPORTED_GROUP_SIZES:
        raise ConfigurationError(
            f"Unsupported group size {key_size}; "
            f"expected one of {SUPPORTED_GROUP_SIZES}"
        )
    numbers = dsa.generate_parameters(key_size=key_size).parameter_numbers()
    return GroupParameters(p=numbers.p, q=numbers.q, g=numbers.g)


# ────────────────────────────────────────────────────────────
#  Feldman VSS Engine
# ────────────────────────────────────────────────────────────

class FeldmanVSS:
    """
    K-of-N Feldman VSS over a fixed group.

    Provides:
      - ``split_secret()``:       shares + commitments
      - ``verify_share()``:       check a share against commitments
      - ``reconstruct_secret()``: recover the secret from K shares

    Parameters are immutable. The random source is injectable per instance
    or per split, so one instance can serve concurrent callers that each
    bring their own source.
    """

    SOURCE = "vss"

    def __init__(
        self,
        p: int,
        q: int,
        g: int,
        threshold: int,
        total_shares: int,
        rng: Optional[RandomSource] = None,
        audit_log: Optional[AuditLog] = None,
    ):
        validate_threshold(threshold, total_shares)
        self._group = GroupParameters(p=p, q=q, g=g)
        self._threshold = threshold
        self._total_shares = total_shares
        self._rng = rng
        self._audit = audit_log

    @classmethod
    def from_group(
        cls,
        group: GroupParameters,
        threshold: int,
        total_shares: int,
        rng: Optional[RandomSource] = None,
        audit_log: Optional[AuditLog] = None,
    ) -> "FeldmanVSS":
        return cls(group.p, group.q, group.g, threshold, total_shares,
                   rng=rng, audit_log=audit_log)

    @classmethod
    def from_config(
        cls,
        config: SharingConfig,
        group: Optional[GroupParameters] = None,
        rng: Optional[RandomSource] = None,
        audit_log: Optional[AuditLog] = None,
    ) -> "FeldmanVSS":
        """Build from ``config``, generating a group of ``config.group_bits`` if none given."""
        validate_threshold(config.threshold, config.total_shares)
        group = group or generate_group_parameters(config.group_bits)
        return cls.from_group(group, config.threshold, config.total_shares,
                              rng=rng, audit_log=audit_log)

    @property
    def group(self) -> GroupParameters:
        return self._group

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def total_shares(self) -> int:
        return self._total_shares

    # ── Split ──

    def split_secret(
        self,
        secret: int,
        rng: Optional[RandomSource] = None,
    ) -> Tuple[List[VSSShare], Commitment]:
        """
        Split *secret* and commit to the polynomial.

        Raises:
            DomainError: secret is negative or not below q.
        """
        q = self._group.q
        if secret < 0 or secret >= q:
            self._log("split_rejected", reason="secret_out_of_range")
            raise DomainError("Secret must be less than q")

        source = rng or self._rng or default_random_source()
        coefficients = random_polynomial(secret, self._threshold, q, source)
        commitments = self.generate_commitments(coefficients)
        shares = self._generate_shares(coefficients)

        self._log(
            "split",
            threshold=self._threshold,
            total_shares=self._total_shares,
            issued=len(shares),
        )
        return shares, commitments

    def generate_commitments(self, coefficients: Sequence[int]) -> Commitment:
        """Cᵢ = g^{cᵢ} mod p."""
        p, g = self._group.p, self._group.g
        return Commitment(tuple(GroupElement(pow(g, c, p)) for c in coefficients))

    # ── Verification ──

    def verify_share(self, share: VSSShare, commitments: Commitment) -> bool:
        """
        Check ``share`` against the published commitments.

        Never raises; malformed shares and empty commitment vectors are
        reported as invalid.
        """
        valid = self._check_share(share, commitments)
        self._log("verify", share_id=share.id, valid=valid)
        return valid

    def _check_share(self, share: VSSShare, commitments: Commitment) -> bool:
        p, q, g = self._group.p, self._group.q, self._group.g
        if share.id < 1 or not 0 <= share.value < q:
            return False
        if len(commitments) == 0:
            return False
        lhs = self._commitment_product(share.id, commitments)
        rhs = GroupElement(pow(g, share.value, p))
        return lhs == rhs

    def _commitment_product(self, share_id: int, commitments: Commitment) -> GroupElement:
        """Π Cᵢ^{(idⁱ mod q)} mod p."""
        p, q = self._group.p, self._group.q
        product = 1
        for power, commitment in enumerate(commitments):
            exponent = pow(share_id, power, q)
            product = (product * pow(commitment, exponent, p)) % p
        return GroupElement(product)

    # ── Reconstruction ──

    def reconstruct_secret(self, shares: Sequence[VSSShare]) -> Optional[int]:
        """
        Recover the secret from the first ``threshold`` shares.

        Returns None when too few shares are given or the selected ids are
        duplicated or zero mod q.
        """
        if len(shares) < self._threshold:
            self._log(
                "reconstruct_failed",
                reason="insufficient_shares",
                supplied=len(shares),
            )
            return None

        selected = shares[:self._threshold]
        points = [(s.id, s.value) for s in selected]
        try:
            secret = interpolate_at_zero(points, self._group.q)
        except ReconstructionFailure:
            self._log(
                "reconstruct_failed",
                reason="singular_denominator",
                supplied=len(shares),
            )
            return None

        self._log("reconstruct", supplied=len(shares), used=len(selected))
        return secret

    # ── Internal ──

    def _generate_shares(self, coefficients: Sequence[Scalar]) -> List[VSSShare]:
        q = self._group.q
        return [
            VSSShare(id=i, value=evaluate_polynomial(coefficients, i, q))
            for i in range(1, self._total_shares + 1)
        ]

    def _log(self, event: str, **details) -> None:
        if self._audit is not None:
            self._audit.record(self.SOURCE, event, **details)

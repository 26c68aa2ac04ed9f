"""
Shamir-VSS — Algebraic Property Checks
========================================

Randomized-trial verification of the guarantees of ``shamir_vss.sss`` and
``shamir_vss.vss``, run against the real implementation.

PROPERTIES VERIFIED:
  B1.  Round trip: any K-subset (in any order) reconstructs the secret
  B2.  Threshold floor: fewer than K shares → absent result
  B3.  Coordinate distinctness: share x / id values are exactly 1..N
  B4.  Commitment binding: honest shares verify, altered shares do not
  B5.  Positional selection: only the first K supplied shares are used
  B6.  Lagrange basis partition of unity: Σ Lᵢ(0) = 1
  B7.  Degree bound: K and K+1 points interpolate to the same f(0)
  B8.  Information-theoretic hiding: K−1 shares fit ANY candidate secret

Commitment binding is checked over the toy group (p=23, q=11, g=2) by
default; pass a larger ``GroupParameters`` to check a realistic group.
"""

from __future__ import annotations

import itertools
import random
import secrets
from dataclasses import dataclass
from typing import List, Optional

from shamir_vss.field import (
    MERSENNE_521,
    interpolate_at_zero,
    lagrange_coefficient,
    mod_inverse,
)
from shamir_vss.sss import SecretSharer, Share
from shamir_vss.vss import FeldmanVSS, GroupParameters, VSSShare


TOY_GROUP = GroupParameters(p=23, q=11, g=2)


@dataclass
class ProofResult:
    """Result of a single algebraic check."""
    name: str
    passed: bool
    trials: int
    detail: str


def _random_secret(bits: int = 256) -> int:
    return secrets.randbits(bits)


# ══════════════════════════════════════════════════
#  B1 — Round Trip
# ══════════════════════════════════════════════════

def proof_b1_round_trip(trials: int = 50) -> ProofResult:
    """∀ secret s, ∀ K-subset S in any order:  reconstruct(S) = s"""
    sharer = SecretSharer(threshold=3, total_shares=5)
    for _ in range(trials):
        secret = _random_secret()
        shares = sharer.split_secret(secret)
        for subset in itertools.permutations(shares, 3):
            recovered = sharer.reconstruct_secret(list(subset))
            if recovered != secret:
                return ProofResult("B1_RoundTrip", False, trials,
                                   f"Subset {[s.x for s in subset]} gave {recovered}")
    return ProofResult("B1_RoundTrip", True, trials,
                       f"{trials} secrets × 60 ordered 3-subsets reconstructed")


# ══════════════════════════════════════════════════
#  B2 — Threshold Floor
# ══════════════════════════════════════════════════

def proof_b2_threshold_floor(trials: int = 50) -> ProofResult:
    """Fewer than K shares never produce a value."""
    sharer = SecretSharer(threshold=4, total_shares=6)
    for _ in range(trials):
        shares = sharer.split_secret(_random_secret())
        for size in range(0, 4):
            if sharer.reconstruct_secret(shares[:size]) is not None:
                return ProofResult("B2_ThresholdFloor", False, trials,
                                   f"{size} shares produced a value")
    return ProofResult("B2_ThresholdFloor", True, trials,
                       f"{trials} trials: 0..K-1 shares always absent")


# ══════════════════════════════════════════════════
#  B3 — Coordinate Distinctness
# ══════════════════════════════════════════════════

def proof_b3_coordinates(trials: int = 20) -> ProofResult:
    """Generated coordinates are pairwise distinct, nonzero and span 1..N."""
    for _ in range(trials):
        n = secrets.choice([1, 3, 5, 9])
        sss_shares = SecretSharer(1, n).split_secret(_random_secret())
        vss_shares, _ = FeldmanVSS.from_group(TOY_GROUP, 1, n).split_secret(7)
        if [s.x for s in sss_shares] != list(range(1, n + 1)):
            return ProofResult("B3_CoordinateDistinctness", False, trials,
                               f"SSS coordinates {[s.x for s in sss_shares]}")
        if [s.id for s in vss_shares] != list(range(1, n + 1)):
            return ProofResult("B3_CoordinateDistinctness", False, trials,
                               f"VSS ids {[s.id for s in vss_shares]}")
    return ProofResult("B3_CoordinateDistinctness", True, trials,
                       f"{trials} splits issued coordinates exactly 1..N")


# ══════════════════════════════════════════════════
#  B4 — Commitment Binding
# ══════════════════════════════════════════════════

def proof_b4_commitment_binding(
    trials: int = 50,
    group: Optional[GroupParameters] = None,
) -> ProofResult:
    """Honest shares verify; a share with value + 1 never does."""
    group = group or TOY_GROUP
    vss = FeldmanVSS.from_group(group, threshold=3, total_shares=5)
    for _ in range(trials):
        secret = secrets.randbelow(group.q)
        shares, commitments = vss.split_secret(secret)
        for share in shares:
            if not vss.verify_share(share, commitments):
                return ProofResult("B4_CommitmentBinding", False, trials,
                                   f"Honest share {share.id} rejected")
            forged = VSSShare(id=share.id, value=(share.value + 1) % group.q)
            if vss.verify_share(forged, commitments):
                return ProofResult("B4_CommitmentBinding", False, trials,
                                   f"Altered share {share.id} accepted")
    return ProofResult("B4_CommitmentBinding", True, trials,
                       f"{trials} splits: honest accepted, altered rejected")


# ══════════════════════════════════════════════════
#  B5 — Positional Selection
# ══════════════════════════════════════════════════

def proof_b5_positional_selection(trials: int = 50) -> ProofResult:
    """Garbage after the first K shares is ignored; garbage inside them is not."""
    sharer = SecretSharer(threshold=3, total_shares=5)
    for _ in range(trials):
        secret = _random_secret()
        shares = sharer.split_secret(secret)
        junk = Share(x=shares[0].x, y=shares[0].y)  # duplicate coordinate
        if sharer.reconstruct_secret(shares[:3] + [junk]) != secret:
            return ProofResult("B5_PositionalSelection", False, trials,
                               "Trailing share influenced the result")
        if sharer.reconstruct_secret([shares[0], junk] + shares[1:]) is not None:
            return ProofResult("B5_PositionalSelection", False, trials,
                               "Duplicate in first K was not rejected")
    return ProofResult("B5_PositionalSelection", True, trials,
                       f"{trials} trials: only the first K shares were used")


# ══════════════════════════════════════════════════
#  B6 — Lagrange Basis Partition of Unity
# ══════════════════════════════════════════════════

def proof_b6_lagrange_basis(trials: int = 50) -> ProofResult:
    """Σ Lᵢ(0) = 1 for any distinct nonzero coordinates."""
    for _ in range(trials):
        k = secrets.choice([1, 2, 3, 4, 5, 8])
        xs = random.sample(range(1, 10_000), k)
        total = sum(lagrange_coefficient(i, xs, MERSENNE_521) for i in range(k)) % MERSENNE_521
        if total != 1:
            return ProofResult("B6_LagrangePartitionOfUnity", False, trials,
                               f"Σ Lᵢ(0) = {total} for xs={xs}")
    return ProofResult("B6_LagrangePartitionOfUnity", True, trials,
                       f"{trials} random basis sets sum to 1")


# ══════════════════════════════════════════════════
#  B7 — Degree Bound
# ══════════════════════════════════════════════════

def proof_b7_degree_bound(trials: int = 50) -> ProofResult:
    """K points fix the polynomial; adding an honest (K+1)-th changes nothing."""
    sharer = SecretSharer(threshold=3, total_shares=5)
    for _ in range(trials):
        shares = sharer.split_secret(_random_secret())
        s_k = interpolate_at_zero([(s.x, s.y) for s in shares[:3]], MERSENNE_521)
        s_k1 = interpolate_at_zero([(s.x, s.y) for s in shares[:4]], MERSENNE_521)
        if s_k != s_k1:
            return ProofResult("B7_DegreeBound", False, trials,
                               "K and K+1 shares disagree")
    return ProofResult("B7_DegreeBound", True, trials,
                       f"{trials} trials: K and K+1 shares agree")


# ══════════════════════════════════════════════════
#  B8 — Information-Theoretic Hiding
# ══════════════════════════════════════════════════

def proof_b8_hiding(trials: int = 50) -> ProofResult:
    """
    Any K−1 shares are consistent with EVERY candidate secret.

    Adding (0, candidate) to K−1 points gives K points and hence a unique
    polynomial of degree K−1; evaluating it at x=1..N produces a full,
    valid share set for the candidate that agrees with the K−1 originals.
    """
    sharer = SecretSharer(threshold=3, total_shares=5)
    for _ in range(trials):
        shares = sharer.split_secret(_random_secret())
        known = shares[:2]
        candidate = _random_secret()
        completed = _complete_share_set(candidate, known)
        if sharer.reconstruct_secret(completed) != candidate:
            return ProofResult("B8_InformationTheoreticHiding", False, trials,
                               "K-1 shares could not be extended to the candidate")
    return ProofResult("B8_InformationTheoreticHiding", True, trials,
                       f"{trials} trials: K-1 shares fit an arbitrary secret")


def _complete_share_set(candidate: int, known: List[Share]) -> List[Share]:
    """Add the x=3 share of the unique quadratic through (0, candidate) and *known*."""
    nodes = [(0, candidate)] + [(s.x, s.y) for s in known]
    x = 3
    y = 0
    # Lagrange form over the nodes, evaluated at x.
    for i, (xi, yi) in enumerate(nodes):
        num, den = 1, 1
        for j, (xj, _) in enumerate(nodes):
            if i != j:
                num = (num * (x - xj)) % MERSENNE_521
                den = (den * (xi - xj)) % MERSENNE_521
        y = (y + yi * num * mod_inverse(den, MERSENNE_521)) % MERSENNE_521
    return list(known) + [Share(x=x, y=y)]


# ══════════════════════════════════════════════════
#  Run all proofs
# ══════════════════════════════════════════════════

ALL_PROOFS = [
    proof_b1_round_trip,
    proof_b2_threshold_floor,
    proof_b3_coordinates,
    proof_b4_commitment_binding,
    proof_b5_positional_selection,
    proof_b6_lagrange_basis,
    proof_b7_degree_bound,
    proof_b8_hiding,
]


def run_all_proofs(verbose: bool = True) -> List[ProofResult]:
    results = []
    for fn in ALL_PROOFS:
        r = fn()
        results.append(r)
        if verbose:
            mark = "✓" if r.passed else "✗"
            print(f"  [{mark}] {r.name}: {r.detail}")
    return results


if __name__ == "__main__":
    print("=" * 60)
    print("Shamir-VSS  Algebraic Property Checks")
    print("=" * 60)
    results = run_all_proofs(verbose=True)
    total = sum(r.trials for r in results)
    passed = all(r.passed for r in results)
    print("-" * 60)
    print(f"Total trials: {total}")
    if passed:
        print(f"RESULT: ✓ All {len(results)} properties verified.")
    else:
        print("RESULT: ✗ FAILURES:")
        for r in results:
            if not r.passed:
                print(f"  {r.name}: {r.detail}")

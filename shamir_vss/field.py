"""
Shamir-VSS — Prime-Field Polynomial Core
==========================================

Shared mathematics of both sharing schemes: random polynomials, evaluation
and Lagrange interpolation at x=0 over GF(m) for a prime modulus m.

ALGORITHM:
  Polynomial:
    f(x) = c₀ + c₁x + … + c_{t−1}x^{t−1}   with c₀ = secret mod m,
    c₁..c_{t−1} uniform in [0, m).

  Evaluate(f, x):
    Σ cᵢ · xⁱ  (mod m), each power via modular exponentiation.

  Interpolate at 0 from t points (xᵢ, yᵢ):
    Lᵢ = Π_{j≠i} x_j / (x_j − xᵢ)   (mod m)
    f(0) = Σ yᵢ · Lᵢ               (mod m)
    The denominator is inverted with Fermat: a^(m−2) mod m.

TWO MODULI:
  Feldman VSS mixes arithmetic mod q (shares, coefficients, exponents) with
  arithmetic mod p (commitments). ``Scalar`` and ``GroupElement`` are kept
  as distinct types so a type checker flags a value used under the wrong
  modulus.

SECURITY RATIONALE:
  - Coefficients come from a CSPRNG (``secrets.SystemRandom``) unless the
    caller injects another source, e.g. a seeded ``random.Random`` in tests.
  - A fresh polynomial is drawn per split; coefficients are never retained.
  - No constant-time guarantees: Python integers leak timing.
"""

import secrets
from typing import Any, Dict, List, NewType, Optional, Sequence, Tuple

from py_ecc.optimized_bls12_381 import curve_order as BLS12_381_ORDER
from py_ecc.secp256k1.secp256k1 import N as SECP256K1_ORDER

from .errors import ConfigurationError, ReconstructionFailure


Scalar = NewType("Scalar", int)
GroupElement = NewType("GroupElement", int)

# Anything exposing ``randrange(start, stop)``: secrets.SystemRandom, random.Random.
RandomSource = Any


# ── Field presets ──
# 2^521 − 1 is a Mersenne prime (the P-521 field prime).
MERSENNE_521 = 2**521 - 1

FIELD_PRESETS: Dict[str, int] = {
    "mersenne521": MERSENNE_521,
    "secp256k1": SECP256K1_ORDER,
    "bls12_381": BLS12_381_ORDER,
}


def resolve_field(name: str) -> int:
    """Look up a named prime modulus."""
    try:
        return FIELD_PRESETS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown field preset {name!r}; "
            f"expected one of {sorted(FIELD_PRESETS)}"
        ) from None


def default_random_source() -> RandomSource:
    return secrets.SystemRandom()


# ────────────────────────────────────────────────────────────
#  Polynomial Engine
# ────────────────────────────────────────────────────────────

def random_polynomial(
    secret: int,
    threshold: int,
    modulus: int,
    rng: Optional[RandomSource] = None,
) -> List[Scalar]:
    """
    Build the coefficients of a random degree-(threshold−1) polynomial.

    Index 0 holds ``secret mod modulus``; the remaining ``threshold − 1``
    coefficients are uniform in ``[0, modulus)``.
    """
    rng = rng or default_random_source()
    coefficients = [Scalar(secret % modulus)]
    for _ in range(threshold - 1):
        coefficients.append(Scalar(rng.randrange(0, modulus)))
    return coefficients


def evaluate_polynomial(coefficients: Sequence[int], x: int, modulus: int) -> Scalar:
    """f(x) = Σ cᵢ · xⁱ  (mod modulus)."""
    result = 0
    for power, coeff in enumerate(coefficients):
        term = coeff * pow(x, power, modulus)
        result = (result + term) % modulus
    return Scalar(result)


# ────────────────────────────────────────────────────────────
#  Reconstruction Engine
# ────────────────────────────────────────────────────────────

def mod_inverse(a: int, modulus: int) -> int:
    """Modular multiplicative inverse via Fermat's little theorem: a^(m-2) mod m."""
    if a % modulus == 0:
        raise ReconstructionFailure("Cannot invert zero in the field")
    return pow(a, modulus - 2, modulus)


def lagrange_coefficient(i: int, xs: Sequence[int], modulus: int) -> Scalar:
    """
    Lagrange basis value Lᵢ(0) for the i-th coordinate of ``xs``.

    Lᵢ(0) = Π_{j≠i} x_j / (x_j − xᵢ)   (mod modulus)

    Raises ``ReconstructionFailure`` when the accumulated denominator is 0,
    i.e. two coordinates coincide mod the modulus.
    """
    xi = xs[i]
    numerator = 1
    denominator = 1
    for j, xj in enumerate(xs):
        if i == j:
            continue
        numerator = (numerator * xj) % modulus
        denominator = (denominator * (xj - xi)) % modulus
    return Scalar((numerator * mod_inverse(denominator, modulus)) % modulus)


def interpolate_at_zero(points: Sequence[Tuple[int, int]], modulus: int) -> Scalar:
    """
    Lagrange interpolation at x=0 over GF(modulus).

    Given points (xᵢ, yᵢ), computes f(0) for the unique polynomial of
    degree < len(points) through all of them.

    Raises ``ReconstructionFailure`` for a coordinate ≡ 0 or for duplicate
    coordinates (mod modulus).
    """
    if not points:
        raise ValueError("Need at least one point for interpolation")

    xs = [x for x, _ in points]
    if any(x % modulus == 0 for x in xs):
        raise ReconstructionFailure("Share coordinate is zero in the field")

    secret = 0
    for i, (_, yi) in enumerate(points):
        secret = (secret + yi * lagrange_coefficient(i, xs, modulus)) % modulus
    return Scalar(secret)

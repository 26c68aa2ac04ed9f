"""
Shamir-VSS — Error Taxonomy
=============================

Three failure classes, each raised at the seam where the bad input is
detected:

  - ``ConfigurationError`` — static parameters are unusable
    (threshold / total-shares relationship, malformed environment values).
    Raised from constructors: a sharer is never built in a bad state.
  - ``DomainError`` — the secret does not fit the working field.
    Raised at split time; the caller may retry with another secret.
  - ``ReconstructionFailure`` — a Lagrange denominator is 0 mod the modulus
    (duplicate or zero coordinate). Raised by the field layer and turned
    into an absent (``None``) result by ``reconstruct_secret``.
"""


class ConfigurationError(ValueError):
    """Invalid static sharing parameters."""


class DomainError(ValueError):
    """Secret outside the valid field range."""


class ReconstructionFailure(ArithmeticError):
    """Lagrange interpolation hit a singular denominator."""

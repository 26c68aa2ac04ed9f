"""
Shamir-VSS — Feldman VSS Tests
================================

Toy-group vectors (p=23, q=11, g=2) for exact expectations, plus a freshly
generated 2048-bit group for binding properties that only hold with
overwhelming probability in a large subgroup.

Run:  python -m pytest shamir_vss/test_vss.py -v
"""

import itertools
import random

import pytest

from shamir_vss.audit_log import AuditLog
from shamir_vss.config import SharingConfig
from shamir_vss.errors import ConfigurationError, DomainError
from shamir_vss.vss import (
    Commitment,
    FeldmanVSS,
    GroupParameters,
    VSSShare,
    check_group_parameters,
    generate_group_parameters,
)


P, Q, G = 23, 11, 2


@pytest.fixture
def toy() -> FeldmanVSS:
    return FeldmanVSS(P, Q, G, threshold=3, total_shares=5)


@pytest.fixture(scope="module")
def group() -> GroupParameters:
    return generate_group_parameters(2048)


@pytest.fixture
def large(group) -> FeldmanVSS:
    return FeldmanVSS.from_group(group, threshold=3, total_shares=5)


# ════════════════════════════════════════════════════════════
#  Reference workflow (toy parameters)
# ════════════════════════════════════════════════════════════

class TestToyWorkflow:

    def test_vss_workflow(self, toy):
        shares, commitments = toy.split_secret(7)

        assert all(toy.verify_share(s, commitments) for s in shares)
        assert toy.reconstruct_secret(shares[:3]) == 7
        assert toy.reconstruct_secret(shares[:2]) is None

    def test_every_k_subset(self, toy):
        shares, _ = toy.split_secret(7)
        for combo in itertools.combinations(shares, 3):
            assert toy.reconstruct_secret(list(combo)) == 7

    def test_every_secret_in_range(self, toy):
        for secret in range(Q):
            shares, commitments = toy.split_secret(secret)
            assert toy.reconstruct_secret(shares[2:]) == secret
            assert all(toy.verify_share(s, commitments) for s in shares)

    def test_ids_are_one_to_n(self, toy):
        shares, _ = toy.split_secret(7)
        assert [s.id for s in shares] == [1, 2, 3, 4, 5]

    def test_values_mod_q_commitments_mod_p(self, toy):
        shares, commitments = toy.split_secret(7)
        assert all(0 <= s.value < Q for s in shares)
        assert len(commitments) == 3
        assert all(0 < c < P for c in commitments)

    def test_first_commitment_is_g_to_secret(self, toy):
        _, commitments = toy.split_secret(7)
        assert commitments[0] == pow(G, 7, P)

    def test_value_mutation_fails_verification(self, toy):
        shares, commitments = toy.split_secret(7)
        for share in shares:
            for delta in range(1, Q):
                forged = VSSShare(id=share.id, value=(share.value + delta) % Q)
                assert not toy.verify_share(forged, commitments)

    def test_seeded_split_is_reproducible(self, toy):
        a = toy.split_secret(7, rng=random.Random(3))
        b = toy.split_secret(7, rng=random.Random(3))
        assert a == b


class TestCommitments:

    def test_generate_commitments_by_hand(self, toy):
        commitments = toy.generate_commitments([7, 3, 5])
        assert commitments == Commitment((pow(2, 7, 23), pow(2, 3, 23), pow(2, 5, 23)))
        assert list(commitments) == [13, 8, 9]

    def test_hand_built_share_verifies(self, toy):
        # f(x) = 7 + 3x + 5x²  over GF(11):  f(2) = 7 + 6 + 20 = 33 ≡ 0
        commitments = toy.generate_commitments([7, 3, 5])
        assert toy.verify_share(VSSShare(id=2, value=0), commitments)
        assert not toy.verify_share(VSSShare(id=2, value=1), commitments)


# ════════════════════════════════════════════════════════════
#  Verification never raises
# ════════════════════════════════════════════════════════════

class TestVerifyEdgeCases:

    def test_value_out_of_range(self, toy):
        _, commitments = toy.split_secret(7)
        assert not toy.verify_share(VSSShare(id=1, value=Q), commitments)
        assert not toy.verify_share(VSSShare(id=1, value=-1), commitments)

    def test_non_positive_id(self, toy):
        _, commitments = toy.split_secret(7)
        assert not toy.verify_share(VSSShare(id=0, value=7), commitments)
        assert not toy.verify_share(VSSShare(id=-3, value=1), commitments)

    def test_empty_commitments(self, toy):
        shares, _ = toy.split_secret(7)
        assert not toy.verify_share(shares[0], Commitment(()))


# ════════════════════════════════════════════════════════════
#  Realistic group
# ════════════════════════════════════════════════════════════

class TestLargeGroup:

    def test_group_is_well_formed(self, group):
        assert group.p.bit_length() == 2048
        assert group.q.bit_length() in (224, 256)
        assert check_group_parameters(group.p, group.q, group.g)

    def test_round_trip(self, large, group):
        secret = random.randrange(group.q)
        shares, commitments = large.split_secret(secret)
        assert all(large.verify_share(s, commitments) for s in shares)
        assert large.reconstruct_secret(shares[1:4]) == secret

    def test_id_mutation_fails_verification(self, large):
        shares, commitments = large.split_secret(123456789)
        for share in shares:
            moved = VSSShare(id=share.id % 5 + 1, value=share.value)
            assert not large.verify_share(moved, commitments)

    def test_foreign_commitments_reject(self, large):
        shares, _ = large.split_secret(42)
        _, other = large.split_secret(42)
        assert not any(large.verify_share(s, other) for s in shares)

    def test_secret_equal_q_rejected(self, large, group):
        with pytest.raises(DomainError, match="less than q"):
            large.split_secret(group.q)

    def test_largest_secret(self, large, group):
        shares, _ = large.split_secret(group.q - 1)
        assert large.reconstruct_secret(shares) == group.q - 1

    def test_from_config_with_group(self, group):
        config = SharingConfig(threshold=2, total_shares=3)
        vss = FeldmanVSS.from_config(config, group=group)
        assert vss.group == group
        shares, commitments = vss.split_secret(99)
        assert vss.verify_share(shares[2], commitments)
        assert vss.reconstruct_secret(shares[1:]) == 99


# ════════════════════════════════════════════════════════════
#  Failure semantics
# ════════════════════════════════════════════════════════════

class TestFailures:

    def test_threshold_above_total_rejected(self):
        with pytest.raises(ConfigurationError, match="less than or equal"):
            FeldmanVSS(P, Q, G, threshold=6, total_shares=5)

    def test_zero_threshold_rejected(self):
        with pytest.raises(ConfigurationError):
            FeldmanVSS(P, Q, G, threshold=0, total_shares=5)

    def test_from_config_validates_before_generating(self):
        with pytest.raises(ConfigurationError):
            FeldmanVSS.from_config(SharingConfig(threshold=9, total_shares=2))

    def test_secret_out_of_range(self, toy):
        with pytest.raises(DomainError):
            toy.split_secret(Q)
        with pytest.raises(DomainError):
            toy.split_secret(-1)

    def test_domain_error_is_recoverable(self, toy):
        with pytest.raises(DomainError):
            toy.split_secret(100)
        shares, _ = toy.split_secret(10)
        assert toy.reconstruct_secret(shares) == 10

    def test_duplicate_ids_absent(self, toy):
        shares, _ = toy.split_secret(7)
        assert toy.reconstruct_secret([shares[0], shares[1], shares[0]]) is None

    def test_ids_congruent_mod_q_absent(self, toy):
        shares, _ = toy.split_secret(7)
        wrapped = VSSShare(id=shares[0].id + Q, value=shares[0].value)
        assert toy.reconstruct_secret([shares[0], shares[1], wrapped]) is None

    def test_positional_selection(self, toy):
        shares, _ = toy.split_secret(7)
        dup = shares[0]
        assert toy.reconstruct_secret(shares[:3] + [dup]) == 7
        assert toy.reconstruct_secret([dup] + shares) is None


# ════════════════════════════════════════════════════════════
#  Group helpers and audit trail
# ════════════════════════════════════════════════════════════

class TestGroupHelpers:

    def test_toy_group_valid(self):
        assert check_group_parameters(23, 11, 2)

    def test_invalid_groups(self):
        assert not check_group_parameters(23, 7, 2)      # 7 ∤ 22
        assert not check_group_parameters(23, 11, 1)     # trivial generator
        assert not check_group_parameters(23, 11, 5)     # 5 has order 22
        assert not check_group_parameters(23, 11, 23)    # g ∉ Z_p

    def test_unsupported_size(self):
        with pytest.raises(ConfigurationError, match="Unsupported group size"):
            generate_group_parameters(1000)


class TestAudit:

    def test_verify_and_reconstruct_events(self):
        log = AuditLog()
        vss = FeldmanVSS(P, Q, G, 3, 5, audit_log=log)
        shares, commitments = vss.split_secret(7)
        vss.verify_share(shares[0], commitments)
        vss.verify_share(VSSShare(id=1, value=(shares[0].value + 1) % Q), commitments)
        vss.reconstruct_secret(shares)

        entries = log.get_entries(source="vss")
        assert [e.data["event"] for e in entries] == ["split", "verify", "verify", "reconstruct"]
        assert [e.data["valid"] for e in log.get_entries(event="verify")] == [True, False]
        assert log.verify_integrity()

    def test_rejected_split_recorded(self):
        log = AuditLog()
        vss = FeldmanVSS(P, Q, G, 3, 5, audit_log=log)
        with pytest.raises(DomainError):
            vss.split_secret(11)
        assert log.get_entries(event="split_rejected")[0].data["reason"] == "secret_out_of_range"

"""
Shamir-VSS — Demonstration
============================

Walks both schemes through split → (verify) → reconstruct and prints the
results. Parameters come from ``SharingConfig.from_env()``.

Run:  python -m shamir_vss.demo
"""

import sys
from typing import Optional

from shamir_vss.audit_log import AuditLog
from shamir_vss.config import SharingConfig
from shamir_vss.sss import SecretSharer
from shamir_vss.vss import FeldmanVSS, GroupParameters


SSS_SECRET = 22773311
VSS_SECRET = 123456789


def demo_shamir_secret_sharing(config: SharingConfig, audit_log: AuditLog) -> bool:
    print("\n=== Demonstrating Shamir's Secret Sharing ===")
    print(f"Original Secret: {SSS_SECRET}")

    sharer = SecretSharer.from_config(config, audit_log=audit_log)
    shares = sharer.split_secret(SSS_SECRET)
    print(f"\nGenerated {len(shares)} shares:")
    for i, share in enumerate(shares, start=1):
        print(f"Share {i}: x = {share.x}, y = {share.y}")

    reconstructed = sharer.reconstruct_secret(shares[:config.threshold])
    if reconstructed is None:
        print("Failed to reconstruct secret")
        return False
    print(f"\nReconstructed secret: {reconstructed}")
    return reconstructed == SSS_SECRET


def demo_verifiable_secret_sharing(
    config: SharingConfig,
    audit_log: AuditLog,
    group: Optional[GroupParameters] = None,
) -> bool:
    print("\n=== Demonstrating Verifiable Secret Sharing ===")
    if group is None:
        print(f"Generating a {config.group_bits}-bit commitment group ...")
    vss = FeldmanVSS.from_config(config, group=group, audit_log=audit_log)
    print(f"Group: |p| = {vss.group.p.bit_length()} bits, "
          f"|q| = {vss.group.q.bit_length()} bits")
    print(f"Original Secret: {VSS_SECRET}")

    shares, commitments = vss.split_secret(VSS_SECRET)
    print("\nGenerated shares:")
    for i, share in enumerate(shares, start=1):
        print(f"Share {i}: ID = {share.id}, Value = {share.value}")

    print("\nVerifying shares:")
    all_valid = True
    for i, share in enumerate(shares, start=1):
        is_valid = vss.verify_share(share, commitments)
        all_valid = all_valid and is_valid
        print(f"Share {i} verification: {'Valid' if is_valid else 'Invalid'}")

    reconstructed = vss.reconstruct_secret(shares[:config.threshold])
    if reconstructed is None:
        print("Failed to reconstruct secret")
        return False
    print(f"\nReconstructed secret: {reconstructed}")
    return all_valid and reconstructed == VSS_SECRET


def main(
    config: Optional[SharingConfig] = None,
    group: Optional[GroupParameters] = None,
) -> int:
    config = config or SharingConfig.from_env()
    audit_log = AuditLog()

    ok = demo_shamir_secret_sharing(config, audit_log)
    ok = demo_verifiable_secret_sharing(config, audit_log, group=group) and ok

    print(f"\nAudit trail: {len(audit_log)} entries, "
          f"integrity {'OK' if audit_log.verify_integrity() else 'BROKEN'}")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())

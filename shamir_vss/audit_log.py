"""
Shamir-VSS — Append-Only Audit Log
====================================

Every split, verification and reconstruction can be recorded in an
append-only ledger. Entries cannot be modified or deleted once written.

WHAT IS RECORDED:
  - Operation metadata only: scheme, threshold, share counts, share ids,
    verification outcome, failure reason.
  - NEVER secrets, polynomial coefficients or share values.

SECURITY RATIONALE:
- Every entry is chained (hash-linked) to its predecessor, so a rewritten
  or dropped entry breaks ``verify_integrity()``.
- Timestamps are taken at write time, not supplied by the caller.
"""

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class AuditEntry:
    """
    A single entry in the audit log.

    - ``index``      sequential position
    - ``timestamp``  write time
    - ``data``       event payload (``source``, ``event`` and details)
    - ``prev_hash``  hash of the previous entry
    - ``entry_hash`` hash of this entry
    """
    index: int
    timestamp: float
    data: Dict[str, Any]
    prev_hash: str
    entry_hash: str = ""

    def compute_hash(self) -> str:
        """SHA-256 over index, timestamp, data and prev_hash."""
        content = json.dumps({
            "index": self.index,
            "timestamp": self.timestamp,
            "data": self.data,
            "prev_hash": self.prev_hash
        }, sort_keys=True, default=str)
        return hashlib.sha256(content.encode()).hexdigest()


class AuditLog:
    """Append-only audit log with hash-chain integrity."""

    def __init__(self):
        self._entries: List[AuditEntry] = []
        self._genesis_hash = hashlib.sha256(b"SHAMIR-VSS-GENESIS").hexdigest()

    def append_entry(self, data: Dict[str, Any]) -> AuditEntry:
        prev_hash = self._entries[-1].entry_hash if self._entries else self._genesis_hash

        entry = AuditEntry(
            index=len(self._entries),
            timestamp=time.time(),
            data=data,
            prev_hash=prev_hash
        )
        entry.entry_hash = entry.compute_hash()

        self._entries.append(entry)
        return entry

    def record(self, source: str, event: str, **details: Any) -> AuditEntry:
        """Append an entry tagged with ``source`` and ``event``."""
        data: Dict[str, Any] = {"source": source, "event": event}
        data.update(details)
        return self.append_entry(data)

    def verify_integrity(self) -> bool:
        """
        Recompute every hash and check the chain linkage.

        Returns False if any entry was modified, reordered or removed.
        """
        for i, entry in enumerate(self._entries):
            if entry.entry_hash != entry.compute_hash():
                return False

            if i == 0:
                if entry.prev_hash != self._genesis_hash:
                    return False
            else:
                if entry.prev_hash != self._entries[i - 1].entry_hash:
                    return False

        return True

    def get_entries(
        self,
        source: Optional[str] = None,
        event: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[AuditEntry]:
        """Query audit entries with optional filters."""
        results = self._entries

        if source:
            results = [e for e in results if e.data.get("source") == source]
        if event:
            results = [e for e in results if e.data.get("event") == event]
        if limit:
            results = results[-limit:]

        return results

    def __len__(self):
        return len(self._entries)

    def dump(self) -> List[Dict[str, Any]]:
        """Export the full log as a list of dictionaries (for inspection)."""
        return [
            {
                "index": e.index,
                "timestamp": e.timestamp,
                "data": e.data,
                "prev_hash": e.prev_hash[:16] + "...",
                "entry_hash": e.entry_hash[:16] + "..."
            }
            for e in self._entries
        ]

"""
Stable digests of pool snapshots, for audit trails and for comparing states produced
by different executions.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

from .pools import PoolSnapshot


CANONICAL_ENCODING_VERSION = 1


def canonical_json_bytes(fields: Mapping[str, Any]) -> bytes:
    """
    Encode a flat record of str/int fields as sorted, whitespace-free ASCII JSON.

    Raises:
        TypeError: For any other value type (bools included)
    """
    for key, value in fields.items():
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise TypeError(f"field {key!r}: only str and int values are encoded, got {type(value).__name__}")
    return json.dumps(dict(fields), sort_keys=True, separators=(",", ":")).encode("ascii")


def snapshot_digest(snapshot: PoolSnapshot) -> str:
    """
    Stable digest of a pool snapshot:

        digest = H("CpSwapSnapshot" || version || 0x00 || canonical_json(snapshot))
    """
    prefix = b"CpSwapSnapshot" + str(CANONICAL_ENCODING_VERSION).encode("ascii") + b"\x00"
    return "0x" + hashlib.sha256(prefix + canonical_json_bytes(snapshot.to_dict())).hexdigest()

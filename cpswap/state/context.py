"""
Execution context: the factory for fresh object identities.

A `TxContext` stands for one transaction. It carries the sender identity and hands
out deterministic ids for every object created while it is live (handles, pools,
minting authorities). It holds no business state.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field


# Type alias
ObjectId = str  # 32-byte hex string (0x...)

ZERO_DIGEST = "0x" + "00" * 32


@dataclass
class TxContext:
    """
    Attributes:
        sender: Identity of the transaction sender (hex string)
        digest: Transaction digest, the seed for derived ids
    """

    sender: str
    digest: str = ZERO_DIGEST
    _ids_created: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.sender, str) or not self.sender:
            raise ValueError("sender must be a non-empty string")
        if not isinstance(self.digest, str) or not self.digest:
            raise ValueError("digest must be a non-empty string")

    @property
    def ids_created(self) -> int:
        return self._ids_created

    def fresh_id(self) -> ObjectId:
        """
        Derive the next object id.

            id = H("CpSwapObject" || digest || sender || counter)
        """
        data = (
            b"CpSwapObject"
            + self.digest.encode("utf-8")
            + self.sender.encode("utf-8")
            + str(self._ids_created).encode("utf-8")
        )
        self._ids_created += 1
        return "0x" + hashlib.sha256(data).hexdigest()

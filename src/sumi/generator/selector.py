"""Function selectors: canonical signatures and their Keccak-256 prefixes.

The EVM dispatches a call on the first four bytes of
``keccak256("name(type1,type2,...)")``. The signature is built from the raw
ABI type text in declaration order; nothing is normalised here, so the
caller must pass canonical type text (see
:func:`~sumi.parser.types.expand_tuple_type`).
"""

from __future__ import annotations

from typing import Sequence

from Crypto.Hash import keccak

SELECTOR_SIZE = 4
"""Number of digest bytes kept as the selector."""


def signature_of(name: str, evm_types: Sequence[str]) -> str:
    """Return the canonical signature text ``name(t1,t2,...)``."""
    return f"{name}({','.join(evm_types)})"


def selector_bytes(signature: str) -> bytes:
    """Return the first four bytes of ``keccak256(signature)``."""
    digest = keccak.new(digest_bits=256)
    digest.update(signature.encode("utf-8"))
    return digest.digest()[:SELECTOR_SIZE]


def selector_hash(signature: str) -> str:
    """Return the selector of *signature* as lowercase hex without a ``0x`` prefix.

    Example::

        >>> selector_hash("transfer(address,uint256)")
        'a9059cbb'
    """
    return selector_bytes(signature).hex()


def encode_selector(name: str, evm_types: Sequence[str]) -> tuple[str, bytes]:
    """Derive the signature and 4-byte selector of a function.

    Args:
        name: Function name as declared in the ABI.
        evm_types: Raw ABI input types in declaration order.

    Returns:
        A ``(signature, selector)`` tuple, e.g.
        ``("transfer(address,uint256)", b"\\xa9\\x05\\x9c\\xbb")``.
    """
    signature = signature_of(name, evm_types)
    return signature, selector_bytes(signature)

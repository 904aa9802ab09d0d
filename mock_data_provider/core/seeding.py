"""
Seeding - Deterministic derivation and selection

Every synthetic value in the system flows from these two functions.
Same key in, same seed out, on every process and every run.
"""
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
UINT32_MASK = 0xFFFFFFFF


def derive(key: str) -> int:
    """FNV-1a hash of key as an unsigned 32-bit integer"""
    h = FNV_OFFSET_BASIS
    for ch in key:
        h ^= ord(ch)
        h = (h * FNV_PRIME) & UINT32_MASK
    return h


def select(items: Sequence[T], seed: int, salt: int = 0) -> Optional[T]:
    """Pick items[(seed + salt) % len(items)], or None when items is empty"""
    if not items:
        return None
    return items[(seed + salt) % len(items)]


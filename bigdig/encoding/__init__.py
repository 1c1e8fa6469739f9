"""
Serialization boundary: canonical mapping / JSON form of bigdig values.
"""

from .canonical import (
    canonical_json_bytes,
    dumps,
    from_canonical,
    loads,
    to_canonical,
)

__all__ = [
    "canonical_json_bytes",
    "dumps",
    "from_canonical",
    "loads",
    "to_canonical",
]

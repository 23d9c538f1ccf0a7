"""
Decoder options and codec-wide constants.
"""
from dataclasses import dataclass, replace
from typing import Optional

# Containers nested deeper than this are rejected. Each level costs two
# interpreter frames, so this stays well under the default recursion limit.
DEFAULT_MAX_DEPTH = 256

# Bytes pulled from a stream source per read.
READ_CHUNK_SIZE = 64 * 1024

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class DecodeOptions:
    """
    Knobs for BencodeDecoder.

    The defaults are permissive: trailing bytes are ignored, duplicate keys
    keep the last value, unsorted keys are accepted, and integer or length
    literals may carry leading zeros or an explicit sign.
    """
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    reject_trailing_data: bool = False
    reject_duplicate_keys: bool = False
    reject_unsorted_keys: bool = False
    canonical_literals: bool = False

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be non-negative or None")

    @classmethod
    def strict(cls, **overrides) -> "DecodeOptions":
        """Options that only accept canonical, fully consumed input."""
        opts = cls(
            reject_trailing_data=True,
            reject_duplicate_keys=True,
            reject_unsorted_keys=True,
            canonical_literals=True,
        )
        return replace(opts, **overrides)

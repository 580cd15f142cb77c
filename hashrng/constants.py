# Block framing: H(counter || seed) with a fixed-width counter prefix
COUNTER_SIZE = 8
COUNTER_BYTEORDER = "big"
COUNTER_LIMIT = 1 << (8 * COUNTER_SIZE)  # blocks per period

# next_u32 / next_u64 decoding
INT_BYTEORDER = "little"

DEFAULT_DIGEST = "sha256"


# Canonical seed encoding type tags (one byte each)
TAG_NONE = b"n"
TAG_BOOL = b"o"
TAG_INT = b"i"
TAG_BYTES = b"b"
TAG_STR = b"s"
TAG_LIST = b"l"
TAG_MAP = b"m"
TAG_RECORD = b"r"

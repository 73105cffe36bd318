import hashlib

# Bump whenever the byte layout fed to the hash changes; indexed LexLSH
# buckets are only comparable between identical versions.
HASH_VERSION = "blake2b-64/round-prefix-v1"

def stable_hash64(data: bytes, round_index: int = 0) -> int:
    """Unsigned 64-bit BLAKE2b digest of ``data`` with the round index prefixed."""
    prefix = round_index.to_bytes(8, "big")
    digest = hashlib.blake2b(prefix + data, digest_size=8).digest()
    return int.from_bytes(digest, "big")

def token_hash64(token: str, round_index: int = 0) -> int:
    return stable_hash64(token.encode("utf-8"), round_index)

"""Token wire format constants."""

# Separates the payload segment from the signature segment; not in the base64url alphabet.
DELIMITER = "."

# HMAC-SHA256 output size in bytes.
DIGEST_SIZE = 32

# Recommended minimum secret entropy for HMAC-SHA256. Not enforced.
RECOMMENDED_SECRET_BYTES = 32

# Name of the expiration field every payload exposes.
EXPIRATION_FIELD = "exp"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

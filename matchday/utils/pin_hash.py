"""PIN hashing helpers used to gate tournament writes."""
import hashlib
import hmac


def hash_pin(pin: str) -> str:
    """Return the SHA-256 hex digest of an organiser PIN."""
    return hashlib.sha256(pin.encode("utf-8")).hexdigest()


def verify_pin(pin: str, pin_hash: str) -> bool:
    """Check a PIN against a stored hash using a constant-time comparison."""
    if not pin or not pin_hash:
        return False
    return hmac.compare_digest(hash_pin(pin), pin_hash)

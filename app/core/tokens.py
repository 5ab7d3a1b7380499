"""
Activation and password-reset token derivation.

Tokens are md5 digests of a server-held per-entity secret (user salt or reset
record id) concatenated with the email address. They prove possession of a
link; they are not a secret in their own right.
"""
import hashlib
import hmac


def md5_hex(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def derive_activation_token(salt: str, email: str) -> str:
    return md5_hex(f"{salt}{email}")


def derive_reset_token(record_id, email: str) -> str:
    return md5_hex(f"{record_id}{email}")


def tokens_match(expected: str, supplied: str | None) -> bool:
    if not supplied:
        return False
    # compare_digest only accepts ASCII str, so compare the encoded bytes.
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))

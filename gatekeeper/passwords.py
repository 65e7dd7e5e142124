"""Password hashing and verification."""

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str, method: str = 'scrypt') -> str:
    """
    Generate a salted, slow, one-way hash of ``password``.

    Each call uses a fresh salt, so hashing the same password twice gives
    different results.

    Parameters
    ----------
    password : str
    method : str
        Key derivation method understood by :mod:`werkzeug.security`, e.g.
        ``scrypt`` or ``pbkdf2:sha256:600000``.

    Returns
    -------
    str
        Hash in werkzeug's ``method$salt$hash`` format.

    """
    return generate_password_hash(password, method=method)


def check_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a hash in constant time."""
    if not password or not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:  # Unknown or malformed hash method.
        return False

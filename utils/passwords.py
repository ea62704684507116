from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Salted one-way hash suitable for storage"""
    return str(generate_password_hash(password))


def verify_password(password_hash: str, password: str) -> bool:
    return bool(check_password_hash(password_hash, password))

"""Password hashing and credential verification."""
import bcrypt

from portal import config
from portal.errors import InvalidCredentialsError
from portal.models import MAX_PASSWORD_BYTES, User


class PasswordHasher:
    """
    Salted password hashing with bcrypt.

    Hashes are stored in place of the plaintext password; the plaintext
    is never kept after registration. Passwords longer than 72 UTF-8
    bytes are rejected at the schema layer and never verify here.
    """

    def __init__(self, rounds: int = config.BCRYPT_ROUNDS):
        """
        Args:
            rounds: bcrypt work factor (log2 of iterations)
        """
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """
        Hash password using bcrypt with a fresh salt.

        Raises:
            ValueError: If password exceeds 72 UTF-8 bytes
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify password against stored hash."""
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode())
        except ValueError:
            # Stored value is not a bcrypt hash
            return False


def authenticate(storage, hasher: PasswordHasher, username: str, password: str) -> User:
    """
    Look up a user by username and check the password.

    Args:
        storage: MemStorage holding the users
        hasher: PasswordHasher used when the user registered
        username: Submitted username
        password: Submitted plaintext password

    Returns:
        The matching user

    Raises:
        InvalidCredentialsError: If the user is unknown or the password is wrong
    """
    user = storage.get_user_by_username(username)
    if user is None or not hasher.verify_password(password, user.password):
        raise InvalidCredentialsError()
    return user

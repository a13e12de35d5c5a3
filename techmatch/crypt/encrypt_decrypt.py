import bcrypt

BCRYPT_ROUNDS = 10
"""bcrypt cost factor applied to every stored password."""


class EncryptionDec:
    """
    Password hashing for user accounts.

    Registration stores ``hash_password(password)``; login compares with
    ``check_passwords``. Rows seeded without a real password hold a marker
    that is not a bcrypt hash and therefore never verifies.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash_password(self, text: str) -> str:
        """
        One-way hash of an account password.

        Parameters
        ----------
        text : str
            Password as typed at registration.

        Returns
        -------
        str
            ``$2b$<rounds>$...`` string stored in ``users.password``.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(text.encode("utf-8"), salt).decode("utf-8")

    def check_passwords(self, plain_text: str, passwd: str) -> bool:
        """
        True when ``plain_text`` matches the stored hash ``passwd``.

        A stored value that is not a bcrypt hash yields False instead of
        raising.
        """
        try:
            return bcrypt.checkpw(plain_text.encode("utf-8"), passwd.encode("utf-8"))
        except ValueError:
            return False

"""Encryption utilities for the manager private key."""

import base64

from cryptography.fernet import Fernet, InvalidToken
from loguru import logger

from app.utils.exceptions import SecurityError


class EncryptionService:
    """
    Encryption service for secrets kept in the environment.

    Uses Fernet (symmetric encryption). Ciphertexts are Fernet tokens wrapped
    in an extra base64 layer.
    """

    def __init__(
        self,
        encryption_key: str | None = None,
        environment: str = "development",
    ) -> None:
        """
        Initialize encryption service.

        Args:
            encryption_key: Base64-encoded Fernet key
            environment: Deployment environment name
        """
        self.environment = environment
        self.fernet: Fernet | None = None
        self.enabled = False

        if not encryption_key:
            return

        try:
            self.fernet = Fernet(encryption_key.encode())
            self.enabled = True
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid encryption key: {e}")
            if self.environment == "production":
                raise SecurityError(
                    "Invalid encryption key in production environment."
                ) from e

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt plaintext.

        Args:
            plaintext: Text to encrypt

        Returns:
            Encrypted text (base64)
        """
        if not self.fernet:
            raise SecurityError("Encryption key not configured")

        encrypted = self.fernet.encrypt(plaintext.encode())
        return base64.b64encode(encrypted).decode()

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt ciphertext.

        When encryption is disabled the value is returned as-is so that
        plaintext keys keep working in development.

        Raises:
            SecurityError: If decryption fails
        """
        if not self.enabled or not self.fernet:
            logger.warning("Encryption disabled - using value as-is (DEV ONLY)")
            return ciphertext

        try:
            encrypted = base64.b64decode(ciphertext.encode())
            return self.fernet.decrypt(encrypted).decode()
        except (InvalidToken, ValueError) as e:
            logger.error(f"Decryption error: {type(e).__name__}")
            raise SecurityError("Decryption failed") from e

    @staticmethod
    def generate_key() -> str:
        """
        Generate new Fernet key.

        Returns:
            Base64-encoded key
        """
        return Fernet.generate_key().decode()

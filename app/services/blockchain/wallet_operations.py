"""
Wallet operations for blockchain service.

This module handles:
- Manager wallet initialization from a (possibly encrypted) private key
- Address validation
- Secure key management
"""

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_address, to_checksum_address
from loguru import logger

from app.config.settings import Settings
from app.utils.encryption import EncryptionService
from app.utils.exceptions import SecurityError
from app.utils.security import mask_address


class WalletManager:
    """
    Holds the manager account used to sign contract writes.
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize wallet manager.

        Args:
            settings: Application settings containing wallet configuration

        Raises:
            SecurityError: If the key cannot be decrypted or parsed
        """
        self.settings = settings
        self.wallet_account: LocalAccount | None = None
        self.wallet_address: str | None = None

        self._init_wallet()

    def _init_wallet(self) -> None:
        """
        Initialize wallet account.

        SECURITY: Decrypts the private key when ENCRYPTION_KEY is configured.
        The decrypted key is only held long enough to build the account.
        """
        encryption_service = EncryptionService(
            self.settings.encryption_key,
            environment=self.settings.environment,
        )
        private_key = encryption_service.decrypt(self.settings.manager_private_key)

        try:
            self.wallet_account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # Never include the key material in the message
            raise SecurityError("MANAGER_PRIVATE_KEY is not a valid private key") from e
        finally:
            del private_key

        self.wallet_address = to_checksum_address(self.wallet_account.address)
        logger.info(f"Manager wallet loaded: {mask_address(self.wallet_address)}")

    @staticmethod
    def validate_wallet_address(address: str) -> bool:
        """
        Validate wallet address format.

        Args:
            address: Wallet address to validate

        Returns:
            True if address is valid, False otherwise
        """
        try:
            return is_address(address)
        except (ValueError, TypeError) as e:
            logger.debug(f"Invalid wallet address format: {e}")
            return False

    def cleanup(self) -> None:
        """Drop the signing account."""
        self.wallet_account = None

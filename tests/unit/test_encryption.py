"""Unit tests for encryption utilities and manager wallet loading."""

import pytest
from cryptography.fernet import Fernet

from app.services.blockchain.wallet_operations import WalletManager
from app.utils.encryption import EncryptionService
from app.utils.exceptions import SecurityError


class TestEncryption:
    """Tests for encryption/decryption utilities."""

    def test_encrypt_decrypt_roundtrip(self):
        """Encryption and decryption should be reversible."""
        service = EncryptionService(Fernet.generate_key().decode())

        encrypted = service.encrypt("test_sensitive_data_123")

        assert encrypted != "test_sensitive_data_123"
        assert service.decrypt(encrypted) == "test_sensitive_data_123"

    def test_encrypt_produces_different_output(self):
        """Same input encrypted twice should produce different outputs."""
        service = EncryptionService(Fernet.generate_key().decode())
        assert service.encrypt("test_data") != service.encrypt("test_data")

    def test_disabled_service_passes_value_through(self):
        """Without a key the value is used as-is."""
        service = EncryptionService(None)
        assert service.enabled is False
        assert service.decrypt("0xplain") == "0xplain"

    def test_encrypt_without_key_raises(self):
        with pytest.raises(SecurityError):
            EncryptionService(None).encrypt("data")

    def test_invalid_encrypted_data_raises(self):
        """Decrypting invalid data should raise SecurityError."""
        service = EncryptionService(Fernet.generate_key().decode())
        with pytest.raises(SecurityError, match="Decryption failed"):
            service.decrypt("invalid_encrypted_data")

    def test_invalid_key_in_production_raises(self):
        with pytest.raises(SecurityError):
            EncryptionService("not-a-fernet-key", environment="production")

    def test_invalid_key_in_development_disables(self):
        service = EncryptionService("not-a-fernet-key")
        assert service.enabled is False

    def test_generate_key(self):
        key = EncryptionService.generate_key()
        assert EncryptionService(key).enabled is True


class TestWalletManager:
    """Tests for loading the manager account."""

    def test_plain_key(self, settings):
        manager = WalletManager(settings)
        assert manager.wallet_address.startswith("0x")
        assert len(manager.wallet_address) == 42

    def test_encrypted_key(self, settings):
        key = EncryptionService.generate_key()
        encrypted = EncryptionService(key).encrypt(settings.manager_private_key)
        plain_address = WalletManager(settings).wallet_address

        encrypted_settings = settings.model_copy(
            update={"manager_private_key": encrypted, "encryption_key": key}
        )

        assert WalletManager(encrypted_settings).wallet_address == plain_address

    def test_invalid_key_does_not_leak(self, settings):
        bad_key = "0xnot-a-real-private-key-but-secret-looking"
        bad_settings = settings.model_copy(update={"manager_private_key": bad_key})

        with pytest.raises(SecurityError) as exc_info:
            WalletManager(bad_settings)

        assert bad_key not in str(exc_info.value)

    def test_cleanup_drops_account(self, settings):
        manager = WalletManager(settings)
        manager.cleanup()
        assert manager.wallet_account is None

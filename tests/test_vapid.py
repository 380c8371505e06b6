"""Tests for VAPID key management."""

import base64
import logging

import pytest
from py_vapid import Vapid

from src.services.vapid import VapidKeyManager, encode_keypair


def b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


class TestVapidKeyManager:
    """Tests for VapidKeyManager."""

    def test_uses_configured_keys(self, vapid_keypair):
        public_key, private_key = vapid_keypair
        manager = VapidKeyManager(public_key, private_key)

        manager.initialize("ops@example.com")

        assert manager.get_public_key() == public_key
        assert encode_keypair(manager.signer) == (public_key, private_key)

    def test_generates_keys_when_not_configured(self, caplog):
        manager = VapidKeyManager()

        with caplog.at_level(logging.INFO, logger="src.services.vapid"):
            manager.initialize("ops@example.com")

        public_key = manager.get_public_key()
        # Uncompressed P-256 point
        raw = b64url_decode(public_key)
        assert len(raw) == 65
        assert raw[0] == 0x04
        assert f"VAPID_PUBLIC_KEY={public_key}" in caplog.text
        assert "VAPID_PRIVATE_KEY=" in caplog.text

    def test_generated_private_key_round_trips(self):
        manager = VapidKeyManager()
        manager.initialize("ops@example.com")
        public_key, private_key = encode_keypair(manager.signer)

        reloaded = Vapid.from_string(private_key=private_key)

        assert encode_keypair(reloaded) == (public_key, private_key)
        assert public_key == manager.get_public_key()

    def test_initialize_is_idempotent(self, caplog):
        manager = VapidKeyManager()
        manager.initialize("ops@example.com")
        public_key = manager.get_public_key()
        caplog.clear()

        with caplog.at_level(logging.INFO, logger="src.services.vapid"):
            manager.initialize("other@example.com")

        assert manager.get_public_key() == public_key
        assert manager.claims() == {"sub": "mailto:ops@example.com"}
        assert "VAPID" not in caplog.text

    def test_claims_are_new_dicts(self, key_manager):
        first = key_manager.claims()
        first["aud"] = "https://push.example.com"

        assert key_manager.claims() == {"sub": "mailto:ops@example.com"}

    def test_requires_initialization(self):
        manager = VapidKeyManager()

        assert manager.initialized is False
        with pytest.raises(RuntimeError):
            manager.get_public_key()
        with pytest.raises(RuntimeError):
            _ = manager.signer

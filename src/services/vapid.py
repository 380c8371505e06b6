"""VAPID key management for authenticating outbound web push messages."""

import logging

from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from py_vapid.utils import b64urlencode

logger = logging.getLogger(__name__)


class VapidKeyManager:
    """Holds the single VAPID keypair used for the lifetime of the process.

    Keys supplied through configuration are used verbatim. Otherwise a fresh
    P-256 keypair is generated on first initialization and logged once so an
    operator can persist it; it changes on every restart until that happens.
    """

    def __init__(self, public_key: str | None = None, private_key: str | None = None) -> None:
        self._configured_public_key = public_key
        self._configured_private_key = private_key
        self._public_key: str | None = None
        self._signer: Vapid | None = None
        self._contact_email: str | None = None

    @property
    def initialized(self) -> bool:
        return self._signer is not None

    def initialize(self, contact_email: str) -> None:
        """Load or generate the keypair. Later calls are no-ops."""
        if self.initialized:
            return

        self._contact_email = contact_email

        if self._configured_public_key and self._configured_private_key:
            self._signer = Vapid.from_string(private_key=self._configured_private_key)
            self._public_key = self._configured_public_key
            logger.info("VAPID keys loaded from environment")
            return

        logger.info("VAPID keys not found in environment, generating new ones")
        signer = Vapid()
        signer.generate_keys()
        public_key, private_key = encode_keypair(signer)
        self._signer = signer
        self._public_key = public_key

        logger.warning(
            "Add these VAPID keys to your .env file:\n"
            f"VAPID_PUBLIC_KEY={public_key}\n"
            f"VAPID_PRIVATE_KEY={private_key}"
        )
        logger.warning("These keys will be regenerated on each restart until added to .env")

    def get_public_key(self) -> str:
        """Application server key handed to browsers when they subscribe."""
        self._ensure_initialized()
        return self._public_key

    @property
    def signer(self) -> Vapid:
        self._ensure_initialized()
        return self._signer

    def claims(self) -> dict:
        """Fresh VAPID claims for one request.

        pywebpush fills in ``aud`` and ``exp`` on the dict it is given, so a
        new one is needed per push service endpoint.
        """
        self._ensure_initialized()
        return {"sub": f"mailto:{self._contact_email}"}

    def _ensure_initialized(self) -> None:
        if not self.initialized:
            raise RuntimeError("VAPID keys have not been initialized")


def encode_keypair(vapid: Vapid) -> tuple[str, str]:
    """Encode a keypair in the URL-safe base64 form browsers and .env files use.

    The public key is the uncompressed EC point, the private key the raw
    32-byte scalar.
    """
    public_bytes = vapid.public_key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    private_value = vapid.private_key.private_numbers().private_value
    return b64urlencode(public_bytes), b64urlencode(private_value.to_bytes(32, "big"))

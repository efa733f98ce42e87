"""
Ed25519 signing identity for Sui
"""

import base64
from typing import Union
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from pysui import SuiConfig

from .config import DEFAULT_RPC_URL
from .errors import ConfigurationError

ED25519_FLAG = 0x00


class SigningIdentity:
    """Deployer keypair, registered as the active address of a pysui configuration"""

    def __init__(self, seed: bytes, rpc_url: str = DEFAULT_RPC_URL):
        if len(seed) != 32:
            raise ConfigurationError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        self._private_key = Ed25519PrivateKey.from_private_bytes(seed)
        self._public_key = self._private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        # Sui keystore format: base64(flag || seed)
        self.keystring = base64.b64encode(bytes([ED25519_FLAG]) + seed).decode("ascii")
        self.config = SuiConfig.user_config(rpc_url=rpc_url, prv_keys=[self.keystring])

    @classmethod
    def from_hex(cls, private_key_hex: str, rpc_url: str = DEFAULT_RPC_URL) -> "SigningIdentity":
        """
        Create an identity from hex key material

        Args:
            private_key_hex: 32-byte seed, or 64-byte secret key (seed + public key)
            rpc_url: Fullnode the pysui configuration points at

        Returns:
            SigningIdentity for that key
        """
        value = private_key_hex.strip()
        if value.startswith(("0x", "0X")):
            value = value[2:]
        try:
            raw = bytes.fromhex(value)
        except ValueError as e:
            raise ConfigurationError("Private key is not a valid hex string") from e
        if len(raw) not in (32, 64):
            raise ConfigurationError(f"Private key must be 32 or 64 bytes, got {len(raw)}")
        return cls(raw[:32], rpc_url=rpc_url)

    @property
    def sui_address(self):
        """pysui SuiAddress of the key, used as transaction sender"""
        return self.config.active_address

    @property
    def address(self) -> str:
        return self.sui_address.address

    @property
    def public_key(self) -> bytes:
        return self._public_key

    def sign(self, data: Union[bytes, bytearray]) -> bytes:
        return self._private_key.sign(bytes(data))

    def __repr__(self) -> str:
        return f"SigningIdentity(address={self.address})"

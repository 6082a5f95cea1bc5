"""
Variant Parameters Module
Hash parameter sets for the AES_CBC_HMAC_SHA2 family (RFC 7518 5.2).
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes

from cbchs.common.errors import UnsupportedAlgorithm


# Hash identifier -> cryptography hash class
HASH_ALGORITHMS = {
    'SHA-256': hashes.SHA256,
    'SHA-384': hashes.SHA384,
    'SHA-512': hashes.SHA512,
}


@dataclass(frozen=True)
class HashParameters:
    """
    Parameters of one AES_CBC_HMAC_SHA2 variant.

    Attributes:
        name: JWA "enc" identifier, e.g. "A128CBC-HS256"
        hash_algorithm: HMAC hash identifier, e.g. "SHA-256"
        key_size: Combined CEK size in bits
    """
    name: str
    hash_algorithm: str
    key_size: int

    IV_SIZE = 128  # bits, for every variant

    def __post_init__(self):
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise UnsupportedAlgorithm(f"Unsupported HMAC hash '{self.hash_algorithm}'")
        # CEK must bisect into a MAC key and an AES key of the hash's half size
        if self.key_size != self.hash_factory().digest_size * 8:
            raise ValueError(
                f"{self.name}: key size {self.key_size} does not match "
                f"{self.hash_algorithm} output size"
            )

    def hash_factory(self):
        """Return a new cryptography HashAlgorithm instance for the HMAC."""
        return HASH_ALGORITHMS[self.hash_algorithm]()

    def iv_size(self):
        return self.IV_SIZE

    def cek_size(self):
        return self.key_size

    def hash_output_size(self):
        """Digest length in bytes."""
        return self.hash_factory().digest_size

    def tag_size(self):
        """Authentication tag length in bytes (half the digest)."""
        return self.hash_output_size() // 2

    def mac_key_size(self):
        return self.key_size // 16

    def enc_key_size(self):
        return self.key_size // 16


A128CBC_HS256 = HashParameters('A128CBC-HS256', 'SHA-256', 256)
A192CBC_HS384 = HashParameters('A192CBC-HS384', 'SHA-384', 384)
A256CBC_HS512 = HashParameters('A256CBC-HS512', 'SHA-512', 512)

SUPPORTED_ALGORITHMS = {
    params.name: params for params in (A128CBC_HS256, A192CBC_HS384, A256CBC_HS512)
}


def get_parameters(name):
    """
    Look up the parameter set for a JWA content encryption name.

    Args:
        name: e.g. "A256CBC-HS512"

    Returns:
        HashParameters: Matching parameter set

    Raises:
        UnsupportedAlgorithm: If the name is not an AES_CBC_HMAC_SHA2 variant
    """
    try:
        return SUPPORTED_ALGORITHMS[name]
    except KeyError:
        raise UnsupportedAlgorithm(f"Unsupported content encryption algorithm '{name}'") from None

"""AES_CBC_HMAC_SHA2 content encryption (A128CBC-HS256 / A192CBC-HS384 / A256CBC-HS512)."""
"""
AEAD Composer Module
Combines an AES-CBC engine with an HMAC-SHA2 authentication tag as
specified for JWE content encryption (RFC 7518 5.2).

    MAC_KEY = CEK[:len/2]          ENC_KEY = CEK[len/2:]
    A       = encoded_header [ || '.' || aad ]
    AL      = uint64_be(bitlen(A))
    T       = HMAC(MAC_KEY, A || IV || C || AL)[:hash_len/2]
"""

import logging

from cryptography.hazmat.primitives import hmac
from cryptography.hazmat.backends import default_backend

from cbchs.common.errors import (
    AuthenticationFailure,
    EngineUnavailable,
    InvalidIVLength,
    InvalidKeyLength,
)
from cbchs.common.utils import constant_time_compare, encode_uint64_be, to_bytes
from cbchs.crypto.aes import select_engine
from cbchs.crypto.variants import get_parameters


logger = logging.getLogger(__name__)


class AESCBCHMAC:
    """
    Authenticated encryption with AES-CBC and a truncated HMAC-SHA2 tag.

    One instance serves one variant. The engine is fixed at construction;
    no state is kept between calls, so an instance may be shared by threads.
    """

    def __init__(self, parameters, engine=None):
        """
        Initialize the composer.

        Args:
            parameters: HashParameters for the variant
            engine: Object with encrypt(data, key, iv) / decrypt(data, key, iv);
                resolved with select_engine() when None

        Raises:
            EngineUnavailable: If no usable engine can be resolved
        """
        if engine is None:
            engine = select_engine()

        if not (callable(getattr(engine, 'encrypt', None)) and callable(getattr(engine, 'decrypt', None))):
            raise EngineUnavailable(
                f"{type(engine).__name__} does not provide encrypt(data, key, iv) and decrypt(data, key, iv)"
            )

        self._parameters = parameters
        self._engine = engine

        logger.debug("%s content encryption using %s engine", parameters.name, self.engine_name)

    @property
    def parameters(self):
        return self._parameters

    @property
    def engine_name(self):
        return getattr(self._engine, 'name', None) or type(self._engine).__name__

    def algorithm_name(self):
        return self._parameters.name

    def hash_algorithm(self):
        return self._parameters.hash_algorithm

    def key_size(self):
        return self._parameters.key_size

    def iv_size(self):
        return self._parameters.iv_size()

    def cek_size(self):
        return self._parameters.cek_size()

    def encrypt_content(self, data, cek, iv, aad, encoded_protected_header):
        """
        Encrypt plaintext and compute its authentication tag.

        Args:
            data: Plaintext (bytes)
            cek: Combined content encryption key (MAC key || AES key)
            iv: 16-byte initialization vector
            aad: Additional authenticated data, or None when absent
            encoded_protected_header: Base64url-encoded protected header

        Returns:
            tuple: (ciphertext, tag) both as bytes

        Raises:
            InvalidKeyLength: If the CEK does not match cek_size()
            InvalidIVLength: If the IV is not 16 bytes
            EngineFailure: If the AES-CBC operation fails
        """
        self._check_inputs(cek, iv)

        ciphertext = self._engine.encrypt(bytes(data), self._encryption_key(cek), bytes(iv))
        tag = self.compute_tag(ciphertext, cek, iv, aad, encoded_protected_header)

        return ciphertext, tag

    def decrypt_content(self, data, cek, iv, aad, encoded_protected_header, tag):
        """
        Verify the authentication tag, then decrypt.

        Args:
            data: Ciphertext (bytes)
            cek: Combined content encryption key
            iv: 16-byte initialization vector
            aad: Additional authenticated data, or None when absent
            encoded_protected_header: Base64url-encoded protected header
            tag: Authentication tag received with the ciphertext

        Returns:
            bytes: Plaintext

        Raises:
            AuthenticationFailure: If the tag does not verify
            InvalidKeyLength: If the CEK does not match cek_size()
            InvalidIVLength: If the IV is not 16 bytes
            EngineFailure: If the AES-CBC operation fails
        """
        self._check_inputs(cek, iv)

        if not self.verify_tag(data, cek, iv, aad, encoded_protected_header, tag):
            logger.warning(
                "%s authentication tag mismatch (ciphertext %d bytes)",
                self._parameters.name, len(data)
            )
            raise AuthenticationFailure()

        return self._engine.decrypt(bytes(data), self._encryption_key(cek), bytes(iv))

    def compute_tag(self, ciphertext, cek, iv, aad, encoded_protected_header):
        """
        Compute the truncated HMAC authentication tag.

        Args:
            ciphertext: Encrypted data (bytes)
            cek: Combined content encryption key
            iv: 16-byte initialization vector
            aad: Additional authenticated data, or None when absent
            encoded_protected_header: Base64url-encoded protected header

        Returns:
            bytes: First half of HMAC(MAC_KEY, A || IV || C || AL)
        """
        auth_data = self.authenticated_data(aad, encoded_protected_header)
        al = encode_uint64_be(len(auth_data) * 8)

        h = hmac.HMAC(self._mac_key(cek), self._parameters.hash_factory(), backend=default_backend())
        h.update(auth_data)
        h.update(bytes(iv))
        h.update(bytes(ciphertext))
        h.update(al)
        digest = h.finalize()

        return digest[:len(digest) // 2]

    def verify_tag(self, ciphertext, cek, iv, aad, encoded_protected_header, tag):
        """
        Check a received tag in constant time.

        Returns:
            bool: True if the tag is authentic
        """
        expected = self.compute_tag(ciphertext, cek, iv, aad, encoded_protected_header)
        return constant_time_compare(expected, to_bytes(tag, 'tag'))

    @staticmethod
    def authenticated_data(aad, encoded_protected_header):
        """
        Build the authenticated AAD: header, plus '.' and aad when aad is present.

        An empty aad (b"") is present and still adds the separator.
        """
        auth_data = to_bytes(encoded_protected_header, 'encoded_protected_header')
        if aad is not None:
            auth_data += b'.' + to_bytes(aad, 'aad')
        return auth_data

    def _check_inputs(self, cek, iv):
        if len(cek) * 8 != self.cek_size():
            raise InvalidKeyLength(
                f"{self._parameters.name} requires a {self.cek_size() // 8}-byte CEK, got {len(cek)}"
            )
        if len(iv) * 8 != self.iv_size():
            raise InvalidIVLength(f"IV must be {self.iv_size() // 8} bytes, got {len(iv)}")

    @staticmethod
    def _mac_key(cek):
        return bytes(cek[:len(cek) // 2])

    @staticmethod
    def _encryption_key(cek):
        return bytes(cek[len(cek) // 2:])

    def __repr__(self):
        return f"AESCBCHMAC({self._parameters.name}, engine={self.engine_name})"


def get_content_encryption(name, engine=None):
    """
    Build a composer for a JWA content encryption name.

    Args:
        name: "A128CBC-HS256", "A192CBC-HS384" or "A256CBC-HS512"
        engine: Optional engine instance

    Returns:
        AESCBCHMAC: Composer for the variant

    Raises:
        UnsupportedAlgorithm: If the name is unknown
        EngineUnavailable: If no engine can be resolved
    """
    return AESCBCHMAC(get_parameters(name), engine=engine)

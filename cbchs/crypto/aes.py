"""Raw AES-CBC engines (PKCS#7) behind one capability."""
"""
AES-CBC Engine Module
Performs raw AES-CBC encryption/decryption with PKCS#7 padding under an
explicit key and IV. Knows nothing about MAC keys or tags.

Two engines are provided:
    cryptography  - OpenSSL through the `cryptography` package (default)
    pycryptodome  - `Crypto.Cipher.AES` from pycryptodome
"""

import importlib.util
import logging
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding as sym_padding

from cbchs.common.config import load_config
from cbchs.common.errors import EngineFailure, EngineUnavailable


logger = logging.getLogger(__name__)


class AESEngine(ABC):
    """Capability: AES in CBC mode with PKCS#7 padding."""

    BLOCK_SIZE = 128  # bits
    IV_SIZE = 16  # bytes
    KEY_SIZES = (16, 24, 32)  # bytes

    name = None

    @abstractmethod
    def encrypt(self, plaintext, key, iv):
        """
        Encrypt plaintext under key and IV.

        Args:
            plaintext: Data to encrypt (bytes)
            key: 16, 24 or 32-byte AES key
            iv: 16-byte initialization vector

        Returns:
            bytes: Ciphertext (multiple of 16 bytes)

        Raises:
            EngineFailure: If key/IV are malformed
        """

    @abstractmethod
    def decrypt(self, ciphertext, key, iv):
        """
        Decrypt ciphertext under key and IV and strip the padding.

        Args:
            ciphertext: Encrypted data (bytes)
            key: 16, 24 or 32-byte AES key
            iv: 16-byte initialization vector

        Returns:
            bytes: Plaintext

        Raises:
            EngineFailure: On malformed length or bad padding
        """

    def _check_key_iv(self, key, iv):
        if len(key) not in self.KEY_SIZES:
            raise EngineFailure(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        if len(iv) != self.IV_SIZE:
            raise EngineFailure(f"AES-CBC IV must be {self.IV_SIZE} bytes, got {len(iv)}")

    def __repr__(self):
        return f"{type(self).__name__}()"


class CryptographyAESEngine(AESEngine):
    """AES-CBC through the `cryptography` package (OpenSSL)."""

    name = 'cryptography'

    def encrypt(self, plaintext, key, iv):
        self._check_key_iv(key, iv)

        # Apply PKCS#7 padding
        padder = sym_padding.PKCS7(self.BLOCK_SIZE).padder()
        padded_data = padder.update(plaintext) + padder.finalize()

        cipher = Cipher(
            algorithms.AES(key),
            modes.CBC(iv),
            backend=default_backend()
        )
        encryptor = cipher.encryptor()
        return encryptor.update(padded_data) + encryptor.finalize()

    def decrypt(self, ciphertext, key, iv):
        self._check_key_iv(key, iv)
        if not ciphertext or len(ciphertext) % self.IV_SIZE:
            raise EngineFailure("Ciphertext length must be a non-zero multiple of the block size")

        cipher = Cipher(
            algorithms.AES(key),
            modes.CBC(iv),
            backend=default_backend()
        )
        decryptor = cipher.decryptor()
        padded_plaintext = decryptor.update(ciphertext) + decryptor.finalize()

        # Remove PKCS#7 padding
        unpadder = sym_padding.PKCS7(self.BLOCK_SIZE).unpadder()
        try:
            return unpadder.update(padded_plaintext) + unpadder.finalize()
        except ValueError as e:
            raise EngineFailure("Invalid PKCS#7 padding") from e


class PyCryptodomeAESEngine(AESEngine):
    """AES-CBC through pycryptodome (`Crypto.Cipher.AES`)."""

    name = 'pycryptodome'

    def __init__(self):
        from Crypto.Cipher import AES
        from Crypto.Util import Padding

        self._aes = AES
        self._padding = Padding

    def encrypt(self, plaintext, key, iv):
        self._check_key_iv(key, iv)
        cipher = self._aes.new(key, self._aes.MODE_CBC, iv)
        return cipher.encrypt(self._padding.pad(plaintext, self._aes.block_size, style='pkcs7'))

    def decrypt(self, ciphertext, key, iv):
        self._check_key_iv(key, iv)
        if not ciphertext or len(ciphertext) % self.IV_SIZE:
            raise EngineFailure("Ciphertext length must be a non-zero multiple of the block size")

        cipher = self._aes.new(key, self._aes.MODE_CBC, iv)
        padded_plaintext = cipher.decrypt(ciphertext)
        try:
            return self._padding.unpad(padded_plaintext, self._aes.block_size, style='pkcs7')
        except ValueError as e:
            raise EngineFailure("Invalid PKCS#7 padding") from e


# Engine name -> (class, top-level module that must be importable)
ENGINES = {
    CryptographyAESEngine.name: (CryptographyAESEngine, 'cryptography'),
    PyCryptodomeAESEngine.name: (PyCryptodomeAESEngine, 'Crypto'),
}

FALLBACK_ORDER = (CryptographyAESEngine.name, PyCryptodomeAESEngine.name)


def _library_present(module_name):
    return importlib.util.find_spec(module_name) is not None


def available_engines():
    """
    List engine names whose backing library is installed.

    Returns:
        list: Engine names in fallback order
    """
    return [name for name in FALLBACK_ORDER if _library_present(ENGINES[name][1])]


def select_engine(preferred=None):
    """
    Resolve an AES-CBC engine.

    Order: explicit `preferred`, then CBCHS_AES_ENGINE, then the first
    installed engine in FALLBACK_ORDER.

    Args:
        preferred: Engine name, or None

    Returns:
        AESEngine: Engine instance

    Raises:
        EngineUnavailable: If the requested engine is unknown or missing,
            or no engine is installed at all
    """
    name = preferred or load_config().aes_engine

    if name is not None:
        name = name.strip().lower()
        if name not in ENGINES:
            raise EngineUnavailable(
                f"Unknown AES engine '{name}'; choose one of: {', '.join(FALLBACK_ORDER)}"
            )
        engine_cls, module_name = ENGINES[name]
        if not _library_present(module_name):
            raise EngineUnavailable(f"AES engine '{name}' requires the '{module_name}' module")
        logger.debug("Using requested AES engine %s", name)
        return engine_cls()

    for name in available_engines():
        logger.debug("Selected AES engine %s", name)
        return ENGINES[name][0]()

    raise EngineUnavailable(
        "Please install 'cryptography' or 'pycryptodome' to use AES-CBC based algorithms"
    )


if __name__ == '__main__':
    import os

    key = os.urandom(16)
    iv = os.urandom(16)
    original = b"This is a secret message for testing AES-CBC encryption!"

    for engine_name in available_engines():
        engine = select_engine(engine_name)
        ct = engine.encrypt(original, key, iv)
        print(f"[{engine_name}] Encrypted (hex): {ct.hex()}")
        assert engine.decrypt(ct, key, iv) == original
        print(f"✓ {engine_name} AES-CBC test passed!")

#!/usr/bin/env python3
"""Known-answer self test for AES_CBC_HMAC_SHA2 content encryption."""
"""
Self Test Script
Runs the RFC 7518 Appendix B.1-B.3 and RFC 7516 Appendix B vectors against the
selected AES engine, then round-trips every variant.
"""

import argparse
import logging
import os
import sys

from cbchs.common.config import load_config
from cbchs.common.errors import AuthenticationFailure, CBCHSError
from cbchs.common.utils import flip_bit
from cbchs.crypto.aead import get_content_encryption
from cbchs.crypto.aes import available_engines, select_engine
from cbchs.crypto.variants import SUPPORTED_ALGORITHMS
from cbchs.crypto.vectors import VECTORS


def check_vector(label, vector, engine):
    """Encrypt and decrypt one known-answer vector."""
    aead = get_content_encryption(vector['alg'], engine=engine)
    ciphertext, tag = aead.encrypt_content(
        vector['plaintext'], vector['cek'], vector['iv'], None, vector['header']
    )
    if ciphertext != vector['ciphertext'] or tag != vector['tag']:
        print(f"[✗] {label}: output does not match the published vector")
        return False

    plaintext = aead.decrypt_content(
        ciphertext, vector['cek'], vector['iv'], None, vector['header'], tag
    )
    if plaintext != vector['plaintext']:
        print(f"[✗] {label}: decryption mismatch")
        return False

    print(f"[✓] {label}")
    return True


def check_round_trip(name, engine):
    """Round-trip random data and confirm a flipped tag bit is rejected."""
    aead = get_content_encryption(name, engine=engine)
    cek = os.urandom(aead.cek_size() // 8)
    iv = os.urandom(aead.iv_size() // 8)
    header = b'eyJlbmMiOiJ' + name.encode('ascii')
    message = os.urandom(100)

    ciphertext, tag = aead.encrypt_content(message, cek, iv, b'context', header)
    if aead.decrypt_content(ciphertext, cek, iv, b'context', header, tag) != message:
        print(f"[✗] {name}: round trip mismatch")
        return False

    try:
        aead.decrypt_content(ciphertext, cek, iv, b'context', header, flip_bit(tag, 0))
    except AuthenticationFailure:
        print(f"[✓] {name}: round trip, {len(tag)}-byte tag")
        return True

    print(f"[✗] {name}: tampered tag was accepted")
    return False


def run_selftest(engine_name=None):
    """
    Run all checks.

    Args:
        engine_name: Engine to test, or None for the default selection

    Returns:
        bool: True if every check passed
    """
    engine = select_engine(engine_name)
    print(f"[*] Engine: {engine.name} (installed: {', '.join(available_engines())})")

    results = [check_vector(label, vector, engine) for label, vector in VECTORS.items()]
    results += [check_round_trip(name, engine) for name in SUPPORTED_ALGORITHMS]
    return all(results)


def main(argv=None):
    parser = argparse.ArgumentParser(description="AES_CBC_HMAC_SHA2 self test")
    parser.add_argument('--engine', help="AES engine name (cryptography, pycryptodome)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, load_config().log_level, logging.WARNING)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        ok = run_selftest(args.engine)
    except CBCHSError as e:
        print(f"[✗] {e}")
        return 1

    if ok:
        print("\n✅ All self tests passed!")
        return 0

    print("\n❌ Self test failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())

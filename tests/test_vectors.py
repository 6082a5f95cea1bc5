"""
Test: Known-answer vectors

Published RFC 7518 / RFC 7516 vectors must be reproduced byte for byte by
every installed engine.
"""

import pytest

from cbchs.common.errors import AuthenticationFailure
from cbchs.common.utils import flip_bit
from cbchs.crypto.aead import get_content_encryption
from cbchs.crypto.vectors import VECTORS


@pytest.fixture(params=sorted(VECTORS))
def vector(request):
    return VECTORS[request.param]


def test_encrypt_matches_vector(engine, vector):
    aead = get_content_encryption(vector['alg'], engine=engine)

    ciphertext, tag = aead.encrypt_content(
        vector['plaintext'], vector['cek'], vector['iv'], None, vector['header']
    )

    assert ciphertext == vector['ciphertext']
    assert tag == vector['tag']


def test_decrypt_matches_vector(engine, vector):
    aead = get_content_encryption(vector['alg'], engine=engine)

    plaintext = aead.decrypt_content(
        vector['ciphertext'], vector['cek'], vector['iv'], None, vector['header'], vector['tag']
    )

    assert plaintext == vector['plaintext']


def test_vector_rejects_modified_ciphertext(vector):
    aead = get_content_encryption(vector['alg'])

    with pytest.raises(AuthenticationFailure):
        aead.decrypt_content(
            flip_bit(vector['ciphertext'], 0), vector['cek'], vector['iv'],
            None, vector['header'], vector['tag']
        )


def test_rfc7518_sizes():
    vector = VECTORS['RFC 7518 B.1']
    assert len(vector['plaintext']) == 128
    assert len(vector['ciphertext']) == 144
    assert len(vector['header']) * 8 == 336


def test_every_variant_has_a_published_vector():
    from cbchs.crypto.variants import SUPPORTED_ALGORITHMS

    assert {vector['alg'] for vector in VECTORS.values()} == set(SUPPORTED_ALGORITHMS)


@pytest.mark.parametrize('label, alg, tag_bytes', [
    ('RFC 7518 B.2', 'A192CBC-HS384', 24),
    ('RFC 7518 B.3', 'A256CBC-HS512', 32),
])
def test_rfc7518_larger_variants(engine, label, alg, tag_bytes):
    vector = VECTORS[label]
    aead = get_content_encryption(alg, engine=engine)

    ciphertext, tag = aead.encrypt_content(
        vector['plaintext'], vector['cek'], vector['iv'], None, vector['header']
    )

    assert len(vector['cek']) * 8 == aead.cek_size()
    assert len(tag) == tag_bytes
    assert tag == vector['tag']
    assert ciphertext == vector['ciphertext']

"""
Known-Answer Vectors
Published AES_CBC_HMAC_SHA2 vectors. The authenticated AAD of each vector
is passed as the encoded protected header with no separate aad.
"""

from cbchs.common.utils import b64url_decode


# RFC 7518 Appendix B.1 (AES_128_CBC_HMAC_SHA_256)
RFC7518_B1 = {
    'alg': 'A128CBC-HS256',
    'cek': bytes(range(32)),
    'iv': bytes.fromhex('1af38c2dc2b96ffdd86694092341bc04'),
    'header': b'The second principle of Auguste Kerckhoffs',
    'plaintext': (
        b'A cipher system must not be required to be secret, and it must be '
        b'able to fall into the hands of the enemy without inconvenience'
    ),
    'ciphertext': bytes.fromhex(
        'c80edfa32ddf39d5ef00c0b468834279a2e46a1b8049f792f76bfe54b903a9c9'
        'a94ac9b47ad2655c5f10f9aef71427e2fc6f9b3f399a221489f16362c7032336'
        '09d45ac69864e3321cf82935ac4096c86e133314c54019e8ca7980dfa4b9cf1b'
        '384c486f3a54c51078158ee5d79de59fbd34d848b3d69550a67646344427ade5'
        '4b8851ffb598f7f80074b9473c82e2db'
    ),
    'tag': bytes.fromhex('652c3fa36b0a7c5b3219fab3a30bc1c4'),
}

# RFC 7518 Appendix B.2 (AES_192_CBC_HMAC_SHA_384), same P, IV and A as B.1
RFC7518_B2 = dict(
    RFC7518_B1,
    alg='A192CBC-HS384',
    cek=bytes(range(48)),
    ciphertext=bytes.fromhex(
        'ea65da6b59e61edb419be62d19712ae5'
        'd303eeb50052d0dfd6697f77224c8edb'
        '000d279bdc14c1072654bd30944230c6'
        '57bed4ca0c9f4a8466f22b226d174621'
        '4bf8cfc2400add9f5126e479663fc90b'
        '3bed787a2f0ffcbf3904be2a641d5c21'
        '05bfe591bae23b1d7449e532eef60a9a'
        'c8bb6c6b01d35d49787bcd57ef484927'
        'f280adc91ac0c4e79c7b11efc60054e3'
    ),
    tag=bytes.fromhex('8490ac0e58949bfe51875d733f93ac2075168039ccc733d7'),
)

# RFC 7518 Appendix B.3 (AES_256_CBC_HMAC_SHA_512), same P, IV and A as B.1
RFC7518_B3 = dict(
    RFC7518_B1,
    alg='A256CBC-HS512',
    cek=bytes(range(64)),
    ciphertext=bytes.fromhex(
        '4affaaadb78c31c5da4b1b590d10ffbd'
        '3dd8d5d302423526912da037ecbcc7bd'
        '822c301dd67c373bccb584ad3e9279c2'
        'e6d12a1374b77f077553df829410446b'
        '36ebd97066296ae6427ea75c2e0846a1'
        '1a09ccf5370dc80bfecbad28c73f09b3'
        'a3b75e662a2594410ae496b2e2e6609e'
        '31e6e02cc837f053d21f37ff4f51950b'
        'be2638d09dd7a4930930806d0703b1f6'
    ),
    tag=bytes.fromhex('4dd3b4c088a7f45c216839645b2012bf2e6269a8c56a816dbc1b267761955bc5'),
)

# RFC 7516 Appendix B (JWE using AES_128_CBC_HMAC_SHA_256)
RFC7516_B = {
    'alg': 'A128CBC-HS256',
    'cek': bytes([
        4, 211, 31, 197, 84, 157, 252, 254, 11, 100, 157, 250, 63, 170, 106, 206,
        107, 124, 212, 45, 111, 107, 9, 219, 200, 177, 0, 240, 143, 156, 44, 207,
    ]),
    'iv': b64url_decode('AxY8DCtDaGlsbGljb3RoZQ'),
    'header': b'eyJhbGciOiJBMTI4S1ciLCJlbmMiOiJBMTI4Q0JDLUhTMjU2In0',
    'plaintext': b'Live long and prosper.',
    'ciphertext': b64url_decode('KDlTtXchhZTGufMYmOYGS4HffxPSUrfmqCHXaI9wOGY'),
    'tag': b64url_decode('U0m_YmjN04DJvceFICbCVQ'),
}

VECTORS = {
    'RFC 7518 B.1': RFC7518_B1,
    'RFC 7518 B.2': RFC7518_B2,
    'RFC 7518 B.3': RFC7518_B3,
    'RFC 7516 B': RFC7516_B,
}

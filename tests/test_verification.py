"""Tests for Ed25519 request signature verification."""
from nacl.signing import SigningKey

from picasso_sdk.verification import verify_signature

from .payloads import TIMESTAMP

BODY = b'{"type":1,"id":"123"}'


class TestVerifySignature:
    def test_valid_signature_is_accepted(self, sign, public_key):
        assert verify_signature(sign(BODY), TIMESTAMP, BODY, public_key) is True

    def test_str_body_is_verified_as_utf8(self, sign, public_key):
        body = '{"content":"café"}'
        signature = sign(body.encode('utf-8'))
        assert verify_signature(signature, TIMESTAMP, body, public_key) is True

    def test_flipped_signature_byte_is_rejected(self, sign, public_key):
        signature = bytearray(bytes.fromhex(sign(BODY)))
        signature[0] ^= 0x01
        assert verify_signature(bytes(signature).hex(), TIMESTAMP, BODY, public_key) is False

    def test_modified_body_is_rejected(self, sign, public_key):
        signature = sign(BODY)
        tampered = bytearray(BODY)
        tampered[-2] ^= 0x01
        assert verify_signature(signature, TIMESTAMP, bytes(tampered), public_key) is False

    def test_modified_timestamp_is_rejected(self, sign, public_key):
        assert verify_signature(sign(BODY), '1700000001', BODY, public_key) is False

    def test_signature_for_other_key_is_rejected(self, public_key):
        other = SigningKey.generate()
        signature = other.sign(TIMESTAMP.encode() + BODY).signature.hex()
        assert verify_signature(signature, TIMESTAMP, BODY, public_key) is False

    def test_non_hex_signature_returns_false(self, public_key):
        assert verify_signature('not-hex', TIMESTAMP, BODY, public_key) is False

    def test_wrong_length_signature_returns_false(self, public_key):
        assert verify_signature('abcd', TIMESTAMP, BODY, public_key) is False

    def test_wrong_length_key_returns_false(self, sign):
        assert verify_signature(sign(BODY), TIMESTAMP, BODY, 'abcd') is False

    def test_missing_key_returns_false(self, sign):
        assert verify_signature(sign(BODY), TIMESTAMP, BODY, '') is False

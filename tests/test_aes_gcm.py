# Tests for AES-256-GCM secret encryption
#
# Coverage:
#   - Round-trip, empty-string convention, nonce uniqueness
#   - Blob layout (nonce || ciphertext || tag)
#   - Tamper detection on every byte
#   - Wrong-key rejection
#   - Malformed blobs (bad base64, too short)
#   - Entropy failure while generating a nonce

import base64

import pytest

from benchvault.core.crypto import aes_gcm
from benchvault.core.crypto.aes_gcm import (
    AES_NONCE_SIZE,
    AES_TAG_SIZE,
    AesGcmCipher,
)
from benchvault.core.crypto.errors import (
    DECRYPTION_FAILED_MESSAGE,
    DecryptionFailedError,
    MalformedBlobError,
    RandomSourceError,
)


@pytest.fixture
def cipher(correct_key):
    return AesGcmCipher(correct_key)


class TestRoundTrip:

    @pytest.mark.parametrize("plaintext", [
        "db-secret-123",
        "x",
        "p@ss w0rd with spaces and ;'\" quotes",
        "пароль-密码-🔑",
        "a" * 4096,
    ])
    def test_decrypt_returns_plaintext(self, cipher, plaintext):
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_encrypt_empty_returns_empty(self, cipher):
        assert cipher.encrypt("") == ""

    def test_decrypt_empty_returns_empty(self, cipher):
        assert cipher.decrypt("") == ""

    def test_same_plaintext_gives_different_blobs(self, cipher):
        first = cipher.encrypt("db-secret-123")
        second = cipher.encrypt("db-secret-123")
        assert first != second
        assert cipher.decrypt(first) == cipher.decrypt(second) == "db-secret-123"

    def test_blob_layout(self, cipher):
        plaintext = "db-secret-123"
        raw = base64.b64decode(cipher.encrypt(plaintext), validate=True)
        assert len(raw) == AES_NONCE_SIZE + len(plaintext.encode()) + AES_TAG_SIZE

    def test_fresh_nonce_prefix(self, cipher):
        nonces = {
            base64.b64decode(cipher.encrypt("same"))[:AES_NONCE_SIZE]
            for _ in range(50)
        }
        assert len(nonces) == 50


class TestTamperDetection:

    def test_flipping_any_byte_fails_authentication(self, cipher):
        raw = bytearray(base64.b64decode(cipher.encrypt("db-secret-123")))

        for index in range(len(raw)):
            tampered = bytearray(raw)
            tampered[index] ^= 0x01
            blob = base64.b64encode(bytes(tampered)).decode()
            with pytest.raises(DecryptionFailedError):
                cipher.decrypt(blob)

    def test_truncated_tag_fails_authentication(self, cipher):
        raw = base64.b64decode(cipher.encrypt("db-secret-123"))
        blob = base64.b64encode(raw[:-1]).decode()
        with pytest.raises(DecryptionFailedError):
            cipher.decrypt(blob)

    def test_nonce_only_fails_authentication(self, cipher):
        blob = base64.b64encode(bytes(AES_NONCE_SIZE + 4)).decode()
        with pytest.raises(DecryptionFailedError):
            cipher.decrypt(blob)


class TestWrongKey:

    def test_wrong_key_rejected(self, correct_key, wrong_key):
        blob = AesGcmCipher(correct_key).encrypt("db-secret-123")
        with pytest.raises(DecryptionFailedError) as exc_info:
            AesGcmCipher(wrong_key).decrypt(blob)
        assert str(exc_info.value) == DECRYPTION_FAILED_MESSAGE


class TestMalformedBlob:

    def test_not_base64(self, cipher):
        with pytest.raises(MalformedBlobError):
            cipher.decrypt("not-base64!!")

    def test_shorter_than_nonce(self, cipher):
        blob = base64.b64encode(b"\x00" * (AES_NONCE_SIZE - 1)).decode()
        with pytest.raises(MalformedBlobError):
            cipher.decrypt(blob)

    def test_legacy_plaintext_value(self, cipher):
        with pytest.raises(MalformedBlobError):
            cipher.decrypt("legacy-pass")


class TestKeyAndEntropy:

    @pytest.mark.parametrize("size", [0, 16, 31, 33])
    def test_wrong_key_size_rejected(self, size):
        with pytest.raises(ValueError):
            AesGcmCipher(bytes(size))

    def test_nonce_entropy_failure(self, cipher, monkeypatch):
        def unavailable(n):
            raise OSError("getrandom failed")

        monkeypatch.setattr(aes_gcm.secrets, "token_bytes", unavailable)
        with pytest.raises(RandomSourceError):
            cipher.encrypt("db-secret-123")

    def test_empty_encrypt_needs_no_entropy(self, cipher, monkeypatch):
        def unavailable(n):
            raise OSError("getrandom failed")

        monkeypatch.setattr(aes_gcm.secrets, "token_bytes", unavailable)
        assert cipher.encrypt("") == ""

    def test_repr_hides_key(self, cipher, correct_key):
        assert correct_key.hex() not in repr(cipher)

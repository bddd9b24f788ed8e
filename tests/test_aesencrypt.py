import pytest

from originkit.aesencrypt import AesEncrypt

KEY_16 = "placeholder" * 2
KEY_24 = "placeholder" * 2 + "secret"
KEY_32 = "placeholder" * 3
KEY_LONGER = "placeholder" * 4


@pytest.mark.parametrize("key", [KEY_16, KEY_24, KEY_32, KEY_LONGER])
@pytest.mark.parametrize("message", ["", "hello", "x" * 100, "\u4e2d\u6587 text"])
def test_round_trip(key, message):
    aes = AesEncrypt(key)
    assert aes.decrypt(aes.encrypt(message)) == message


def test_ciphertext_length_matches_plaintext_bytes():
    aes = AesEncrypt(KEY_16)
    message = "\u4e2d\u6587 abc"
    assert len(aes.encrypt(message)) == len(message.encode("utf-8"))


def test_ciphertext_differs_from_plaintext():
    aes = AesEncrypt(KEY_16)
    message = "a fairly long message to encrypt"
    ciphertext = aes.encrypt(message)
    assert len(ciphertext) == len(message.encode("utf-8"))
    assert ciphertext != message.encode("utf-8")
    assert aes.decrypt(ciphertext) == message


def test_encryption_is_deterministic():
    first = AesEncrypt(KEY_24).encrypt("same")
    second = AesEncrypt(KEY_24).encrypt("same")
    assert first == second
    assert AesEncrypt(KEY_24).decrypt(first) == "same"


def test_stream_prefix_property():
    aes = AesEncrypt(KEY_16)
    short = aes.encrypt("abcdefghij")
    long = aes.encrypt("abcdefghijklmnopqrstuvwxyz")
    assert long.startswith(short)


def test_key_is_cut_to_32_bytes():
    message = "truncate the key"
    assert AesEncrypt(KEY_32).encrypt(message) == AesEncrypt(KEY_LONGER).encrypt(message)


def test_key_size_changes_cipher():
    message = "different strengths"
    assert AesEncrypt(KEY_16).encrypt(message) != AesEncrypt(KEY_24).encrypt(message)


def test_wrong_key_does_not_recover_message():
    message = "only for the right key"
    data = AesEncrypt(KEY_16).encrypt(message)
    assert AesEncrypt(KEY_16).decrypt(data) == message
    assert AesEncrypt(KEY_32).decrypt(data) != message


def test_short_key_is_rejected():
    with pytest.raises(ValueError, match="less than 16"):
        AesEncrypt("secret")
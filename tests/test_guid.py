import pytest

from originkit.guid import UUID, from_str, must_from_str, rand_uuid

CANONICAL = "00112233-4455-6677-8899-aabbccddeeff"


def test_hex_layout_of_random_uuid():
    text = rand_uuid().hex()
    assert len(text) == 36
    assert [i for i, ch in enumerate(text) if ch == "-"] == [8, 13, 18, 23]


def test_random_uuid_version_and_variant_bits():
    for _ in range(50):
        u = rand_uuid()
        assert u.data[6] >> 4 == 4
        assert u.data[8] >> 6 == 0b10
        assert u.hex()[14] == "4"
        assert u.hex()[19] in "89ab"


def test_random_uuids_are_unique():
    assert len({rand_uuid() for _ in range(200)}) == 200


def test_hex_ex_is_hex_without_dashes():
    u = rand_uuid()
    assert u.hex_ex() == u.hex().replace("-", "")
    assert len(u.hex_ex()) == 32


def test_parse_canonical_form():
    u = from_str(CANONICAL)
    assert u.data == bytes.fromhex(CANONICAL.replace("-", ""))
    assert u.hex() == CANONICAL
    assert str(u) == CANONICAL


@pytest.mark.parametrize(
    "text",
    [
        CANONICAL,
        CANONICAL.replace("-", ""),
        "{" + CANONICAL + "}",
        CANONICAL.upper(),
    ],
)
def test_accepted_forms_parse_to_same_value(text):
    assert from_str(text) == from_str(CANONICAL)


def test_round_trip():
    u = rand_uuid()
    assert from_str(u.hex()) == u
    assert from_str(u.hex_ex()) == u
    assert must_from_str(u.hex()) == u


def test_empty_string_is_rejected():
    with pytest.raises(ValueError, match="Empty string"):
        from_str("")


@pytest.mark.parametrize(
    "text",
    [
        "not-a-uuid",
        CANONICAL[:-1],
        CANONICAL + "0",
        CANONICAL.replace("a", "g"),
        CANONICAL + "\n",
    ],
)
def test_invalid_strings_are_rejected(text):
    with pytest.raises(ValueError, match="Invalid string format"):
        from_str(text)


def test_must_from_str_raises_on_bad_input():
    with pytest.raises(ValueError):
        must_from_str("zzz")


def test_uuid_requires_sixteen_bytes():
    with pytest.raises(ValueError):
        UUID(b"\x00" * 15)
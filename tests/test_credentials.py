from credentials import BCRYPT_ROUNDS, hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("admin123")

    assert hashed != "admin123"
    assert hashed.startswith("$2")
    assert f"${BCRYPT_ROUNDS}$" in hashed
    assert verify_password("admin123", hashed)
    assert not verify_password("admin1234", hashed)


def test_hashes_are_salted():
    assert hash_password("author123") != hash_password("author123")

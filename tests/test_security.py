from globetrekker.core.security import hash_password, verify_password


def test_hash_verifies_and_is_salted():
    a = hash_password("s3cret", rounds=4)
    b = hash_password("s3cret", rounds=4)

    assert a != "s3cret"
    assert a != b
    assert verify_password("s3cret", a)
    assert verify_password("s3cret", b)
    assert not verify_password("S3cret", a)


def test_malformed_digest_never_verifies():
    assert not verify_password("s3cret", "not-a-bcrypt-digest")
    assert not verify_password("s3cret", "")
    assert not verify_password("", hash_password("x", rounds=4))


def test_long_passwords_hash():
    pw = "p" * 100
    assert verify_password(pw, hash_password(pw, rounds=4))

from app.core.tokens import derive_activation_token, derive_reset_token, md5_hex, tokens_match


def test_activation_token_is_stable():
    assert derive_activation_token("s1", "a@x.com") == derive_activation_token("s1", "a@x.com")


def test_activation_token_changes_with_salt():
    assert derive_activation_token("s1", "a@x.com") != derive_activation_token("s2", "a@x.com")


def test_activation_token_is_md5_of_salt_and_email():
    assert derive_activation_token("s1", "a@x.com") == md5_hex("s1a@x.com")


def test_reset_token_uses_record_id_and_email():
    assert derive_reset_token(7, "a@x.com") == md5_hex("7a@x.com")
    assert derive_reset_token(7, "a@x.com") != derive_reset_token(8, "a@x.com")


def test_tokens_match_rejects_empty():
    token = derive_reset_token(1, "a@x.com")
    assert tokens_match(token, token)
    assert not tokens_match(token, "")
    assert not tokens_match(token, None)
    assert not tokens_match(token, "wrong-token")


def test_tokens_match_rejects_non_ascii():
    token = derive_activation_token("s1", "a@x.com")
    assert not tokens_match(token, "wrong-tökén")
    assert not tokens_match(token, "ä")

import hashlib
import pytest
from algosdk import encoding, logic

from rps_wager import Choice, commit, app_address
from rps_wager.commitment import normalize_secret, validate_choice, generate_secret
from rps_wager.errors import ChoiceInvalid, SecretInvalid
from conftest import PLAYER1, PLAYER2

APP = app_address(1234)

def test_digest_layout_matches_contract():
    # Sha256(Concat(Itob(choice), secret, Txn.sender(), Global.current_application_address()))
    secret = b"secret".ljust(32, b"\x00")
    expected = hashlib.sha256(
        (1).to_bytes(8, "big") + secret + encoding.decode_address(PLAYER1) + encoding.decode_address(APP)
    ).digest()
    assert commit(Choice.ROCK, b"secret", PLAYER1, APP) == expected
    assert len(expected) == 32

def test_commit_is_deterministic_and_accepts_text_secret():
    assert commit(Choice.PAPER, "secret", PLAYER1, APP) == commit(2, b"secret", PLAYER1, APP)

def test_commit_binds_every_input():
    base = commit(Choice.ROCK, b"secret", PLAYER1, APP)
    assert commit(Choice.PAPER, b"secret", PLAYER1, APP) != base
    assert commit(Choice.ROCK, b"secret2", PLAYER1, APP) != base
    assert commit(Choice.ROCK, b"secret", PLAYER2, APP) != base
    # same commitment cannot be replayed against another application instance
    assert commit(Choice.ROCK, b"secret", PLAYER1, app_address(1235)) != base

@pytest.mark.parametrize("bad", [Choice.NONE, 0, 4, -1])
def test_rejects_unplayable_choice(bad):
    with pytest.raises(ChoiceInvalid) as e:
        commit(bad, b"secret", PLAYER1, APP)
    assert e.value.reason == "Invalid choice"

def test_validate_choice_returns_enum():
    assert validate_choice(3) is Choice.SCISSORS

def test_secret_padding_and_limit():
    assert normalize_secret(b"ab") == b"ab" + bytes(30)
    assert normalize_secret(bytes(range(32))) == bytes(range(32))
    with pytest.raises(SecretInvalid):
        normalize_secret(bytes(33))

def test_generated_secret_is_32_bytes():
    s = generate_secret()
    assert len(s) == 32 and s != generate_secret()

def test_app_address_is_algosdk_application_address():
    assert app_address(1234) == logic.get_application_address(1234)

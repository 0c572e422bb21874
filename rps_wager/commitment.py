# rps_wager/commitment.py
# Commitment codec: sha256(itob(choice) || secret32 || committer || app address)
#
# The contract recomputes the same digest with
#   Sha256(Concat(Itob(choice), secret, Txn.sender(), Global.current_application_address()))
# so an identifier built here is valid for both the Python engine and the app.
import hashlib
import secrets

from algosdk import encoding, logic

from .errors import ChoiceInvalid, SecretInvalid
from .wager_types import Choice

SECRET_SIZE = 32


def validate_choice(choice) -> Choice:
    """Return choice as a playable Choice or raise ChoiceInvalid."""
    try:
        c = Choice(choice)
    except ValueError:
        raise ChoiceInvalid() from None
    if c == Choice.NONE:
        raise ChoiceInvalid()
    return c


def normalize_secret(secret) -> bytes:
    """Right-pad a secret (bytes or text) to 32 bytes."""
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    secret = bytes(secret)
    if len(secret) > SECRET_SIZE:
        raise SecretInvalid()
    return secret.ljust(SECRET_SIZE, b"\x00")


def generate_secret() -> bytes:
    return secrets.token_bytes(SECRET_SIZE)


def app_address(app_id: int) -> str:
    """Address of the application account the commitments are bound to."""
    return logic.get_application_address(app_id)


def commit(choice, secret, identity: str, bound_to: str) -> bytes:
    """
    Derive the 32-byte wager identifier.

    Args:
        choice: ROCK, PAPER or SCISSORS
        secret: opaque value, at most 32 bytes
        identity: committer's address (the bettor)
        bound_to: address of the application instance

    Returns:
        sha256 digest of the tuple
    """
    c = validate_choice(choice)
    data = (
        int(c).to_bytes(8, "big")
        + normalize_secret(secret)
        + encoding.decode_address(identity)
        + encoding.decode_address(bound_to)
    )
    return hashlib.sha256(data).digest()

import os
import requests
import pytest
from algosdk import encoding
from algosdk.v2client.algod import AlgodClient
from algosdk.kmd import KMDClient

from rps_wager import GameConfig, LocalnetConfig, ManualClock, RockPaperScissors

START = 1_700_000_000

def address(n: int) -> str:
    return encoding.encode_address(bytes([n]) * 32)

OWNER, PLAYER1, PLAYER2, PLAYER3 = address(1), address(2), address(3), address(4)

@pytest.fixture
def clock():
    return ManualClock(START)

@pytest.fixture
def game(clock):
    return RockPaperScissors(GameConfig(commission=10000, max_expiry=600), owner=OWNER, clock=clock)

@pytest.fixture
def events(game):
    seen = []
    game.subscribe(seen.append)
    return seen

# ---- LocalNet ----

LOCALNET = LocalnetConfig.from_env()

def _localnet_up() -> bool:
    try:
        return requests.get(f"{LOCALNET.algod_addr}/health", timeout=3).status_code == 200
    except requests.RequestException:
        return False

@pytest.fixture(scope="session")
def algod() -> AlgodClient:
    if os.getenv("SKIP_LOCALNET") or not _localnet_up():
        pytest.skip("Algorand LocalNet not reachable at " + LOCALNET.algod_addr)
    return AlgodClient(LOCALNET.algod_token, LOCALNET.algod_addr,
                       headers={"X-Algo-API-Token": LOCALNET.algod_token})

@pytest.fixture(scope="session")
def funded_accounts(algod) -> list[tuple[str, str]]:
    """(address, private key) pairs from the first KMD wallet, at least two."""
    kmd = KMDClient(LOCALNET.kmd_token, LOCALNET.kmd_addr)
    wl = kmd.list_wallets()
    wallets = wl.get("wallets", []) if isinstance(wl, dict) else wl
    assert wallets, "No KMD wallets found in LocalNet"
    wallet_id = wallets[0]["id"]
    for pw in ["", "a", "testpassword"]:
        try:
            handle = kmd.init_wallet_handle(wallet_id, pw)
        except Exception:
            continue
        try:
            keys = kmd.list_keys(handle)
            while len(keys) < 2:
                keys.append(kmd.generate_key(handle))
            return [(addr, kmd.export_key(handle, pw, addr)) for addr in keys]
        finally:
            kmd.release_wallet_handle(handle)
    raise AssertionError("Could not unlock KMD wallet with '', 'a', or 'testpassword'")

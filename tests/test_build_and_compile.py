import json
import requests
import pytest

from rps_wager import build
from rps_wager.contract import OP_BET, OP_COUNTER, OP_VERIFY, OP_BETTOR_RECLAIM, OP_OPPONENT_RECLAIM, OP_WITHDRAW
from conftest import LOCALNET

@pytest.fixture(scope="module")
def artifacts(tmp_path_factory):
    out = tmp_path_factory.mktemp("artifacts")
    manifest = build.build(out)
    return out, manifest

def test_artifacts_exist(artifacts):
    out, manifest = artifacts
    approval = out / "approval.teal"
    clear = out / "clear.teal"
    assert approval.exists(), f"Missing {approval}"
    assert clear.exists(), f"Missing {clear}"
    j = json.loads((out / "contract.manifest.json").read_text())
    assert j == manifest
    assert j["teal_version"] == 8
    assert j["artifacts"]["approval"]["sha256"] == build.sha256_hex(approval.read_text())

def test_approval_program_routes_every_method(artifacts):
    out, _ = artifacts
    teal = (out / "approval.teal").read_text()
    assert teal.startswith("#pragma version 8")
    for op in (OP_BET, OP_COUNTER, OP_VERIFY, OP_BETTOR_RECLAIM, OP_OPPONENT_RECLAIM, OP_WITHDRAW):
        assert f'"{op}"' in teal, f"no route for {op}"
    for opcode in ("sha256", "box_put", "box_replace", "global LatestTimestamp", "itxn_submit"):
        assert opcode in teal

def test_build_is_reproducible(tmp_path, artifacts):
    _, first = artifacts
    assert build.build(tmp_path) == first

def test_algod_compile_endpoint_localnet(algod, artifacts):
    out, _ = artifacts
    approval = (out / "approval.teal").read_text()

    headers = {"Content-Type": "text/plain", "X-Algo-API-Token": LOCALNET.algod_token}

    r = requests.post(
        f"{LOCALNET.algod_addr}/v2/teal/compile",
        data=approval,
        headers=headers,
        timeout=15,
    )
    assert r.status_code == 200, f"compile failed: {r.status_code} {r.text}"
    assert "result" in r.json()

# rps_wager/build.py
import json, hashlib, logging, sys
from pathlib import Path
from pyteal import compileTeal, Mode
from .contract import approval_program, clear_state_program

TEAL_VERSION = 8
ARTIFACTS = Path(__file__).resolve().parent.parent / "artifacts"

log = logging.getLogger(__name__)

def sha256_hex(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()

def compile_programs() -> tuple[str, str]:
    approval_teal = compileTeal(approval_program(), mode=Mode.Application, version=TEAL_VERSION)
    clear_teal = compileTeal(clear_state_program(), mode=Mode.Application, version=TEAL_VERSION)
    return approval_teal, clear_teal

def build(out_dir: Path = ARTIFACTS) -> dict:
    """Compile both programs into out_dir and return the manifest written next to them."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    approval_teal, clear_teal = compile_programs()

    (out_dir / "approval.teal").write_text(approval_teal, encoding="utf-8")
    (out_dir / "clear.teal").write_text(clear_teal, encoding="utf-8")

    manifest = {
        "contract": "rps-wager v1 - commit-reveal rock/paper/scissors",
        "teal_version": TEAL_VERSION,
        "artifacts": {
            "approval": {"file": "approval.teal", "sha256": sha256_hex(approval_teal)},
            "clear": {"file": "clear.teal", "sha256": sha256_hex(clear_teal)},
        },
    }
    (out_dir / "contract.manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    log.info("wrote artifacts to %s", out_dir)
    return manifest

def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    argv = sys.argv[1:] if argv is None else argv
    out_dir = Path(argv[0]) if argv else ARTIFACTS
    build(out_dir)
    print("Wrote artifacts to", out_dir)

if __name__ == "__main__":
    main()

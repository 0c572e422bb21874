# rps_wager/config.py
# Settings read from the environment, with LocalNet defaults
import os
from dataclasses import dataclass

LOCALNET_TOKEN = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GameConfig:
    commission: int = 10000     # microAlgos kept per deposit
    max_expiry: int = 600       # seconds; also the reveal window added on counter
    app_id: int = 0             # application the commitments are bound to
    paused: bool = False

    def __post_init__(self):
        if self.commission < 0:
            raise ValueError(f"commission must be >= 0, got {self.commission}")
        if self.max_expiry < 0:
            raise ValueError(f"max_expiry must be >= 0, got {self.max_expiry}")

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            commission=int(os.getenv("RPS_COMMISSION", "10000")),
            max_expiry=int(os.getenv("RPS_MAX_EXPIRY", "600")),
            app_id=int(os.getenv("RPS_APP_ID", "0")),
            paused=_env_bool("RPS_PAUSED", False),
        )


@dataclass(frozen=True)
class LocalnetConfig:
    algod_addr: str = "http://localhost:4001"
    algod_token: str = LOCALNET_TOKEN
    kmd_addr: str = "http://localhost:4002"
    kmd_token: str = LOCALNET_TOKEN

    @classmethod
    def from_env(cls) -> "LocalnetConfig":
        algod_token = os.getenv("ALGOD_LOCAL_TOKEN", LOCALNET_TOKEN)
        return cls(
            algod_addr=os.getenv("ALGOD_LOCAL", "http://localhost:4001"),
            algod_token=algod_token,
            kmd_addr=os.getenv("KMD_LOCAL", "http://localhost:4002"),
            kmd_token=os.getenv("KMD_LOCAL_TOKEN", algod_token),
        )

"""
Commit-reveal rock/paper/scissors wagers.

The bettor commits sha256(choice, secret, bettor, app) with a stake, the
named opponent answers in plaintext with a matching stake, and the bettor
reveals. Winner takes both net stakes, a tie refunds each side, and after
expiry exactly one party may reclaim.

Usage:
    from rps_wager import RockPaperScissors, GameConfig, Choice

    game = RockPaperScissors(GameConfig(commission=10000, max_expiry=600), owner=owner)
    wager_id = game.commit(Choice.ROCK, b"secret", alice)
    game.place(alice, wager_id, 60, bob, deposit=11000)
    game.counter(bob, wager_id, Choice.SCISSORS, deposit=11000)
    game.verify(alice, Choice.ROCK, b"secret")    # Outcome.BETTOR_WINS
    game.withdraw(alice, 2000)

The same protocol compiled for Algorand lives in rps_wager.contract
(build artifacts with `python -m rps_wager.build`).
"""

from .wager_types import Choice, Outcome, Wager, ZERO_ADDRESS
from .config import GameConfig, LocalnetConfig
from .commitment import commit, generate_secret, app_address
from .resolution import BEATS, resolve
from .ledger import WagerRepository, InMemoryWagerRepository, JsonFileWagerRepository
from .clock import Clock, SystemClock, ManualClock
from .gate import AdminGate, OwnerGate
from .payout import Payout, PullPayout, PushPayout, RecordingTransfer
from .game import RockPaperScissors
from . import errors, events

__version__ = "0.1.0"
__all__ = [
    # Types
    "Choice", "Outcome", "Wager", "ZERO_ADDRESS",
    # Config
    "GameConfig", "LocalnetConfig",
    # Codec and resolution
    "commit", "generate_secret", "app_address", "BEATS", "resolve",
    # Collaborators
    "WagerRepository", "InMemoryWagerRepository", "JsonFileWagerRepository",
    "Clock", "SystemClock", "ManualClock", "AdminGate", "OwnerGate",
    "Payout", "PullPayout", "PushPayout", "RecordingTransfer",
    # Engine
    "RockPaperScissors", "errors", "events",
]

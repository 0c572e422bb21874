# rps_wager/events.py
# Notifications emitted by the engine; the contract logs the same names
from dataclasses import asdict, dataclass

from .wager_types import Choice


@dataclass(frozen=True)
class Event:
    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        data = {k: (v.name if isinstance(v, Choice) else v) for k, v in asdict(self).items()}
        data["event"] = self.name
        return data


@dataclass(frozen=True)
class CommissionChanged(Event):
    old: int
    new: int


@dataclass(frozen=True)
class WagerPlaced(Event):
    bettor: str
    opponent: str
    amount: int
    expiry_delta: int


@dataclass(frozen=True)
class WagerCountered(Event):
    opponent: str
    choice: Choice


@dataclass(frozen=True)
class WagerVerified(Event):
    winner: str
    amount: int
    bettor_choice: Choice
    opponent_choice: Choice


@dataclass(frozen=True)
class WagerTied(Event):
    bettor: str
    opponent: str
    amount: int
    choice: Choice


@dataclass(frozen=True)
class WagerReclaimed(Event):
    claimant: str
    amount: int


@dataclass(frozen=True)
class Withdrawal(Event):
    account: str
    amount: int

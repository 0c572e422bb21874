# rps_wager/wager_types.py
# Choices, outcomes and the wager record shared by the engine and the codec
from dataclasses import dataclass, replace
from enum import Enum, IntEnum

from algosdk import encoding

ZERO_ADDRESS = encoding.encode_address(bytes(32))


class Choice(IntEnum):
    """Plaintext move. NONE marks an uncountered wager and is never playable."""
    NONE = 0
    ROCK = 1
    PAPER = 2
    SCISSORS = 3


class Outcome(Enum):
    TIE = "tie"
    BETTOR_WINS = "bettor"
    OPPONENT_WINS = "opponent"


@dataclass(frozen=True)
class Wager:
    """
    Wager record keyed by its commitment identifier.

    The bettor is not stored: it is recovered at reveal time by recomputing
    the commitment with the caller's address. A stored record with
    amount == 0 is resolved; an identifier with no record is unused.
    """
    amount: int = 0
    expiry_at: int = 0
    opponent: str = ZERO_ADDRESS
    counter_choice: Choice = Choice.NONE

    @property
    def is_live(self) -> bool:
        return self.amount > 0

    @property
    def is_countered(self) -> bool:
        return self.counter_choice != Choice.NONE

    def is_expired(self, now: int) -> bool:
        return now > self.expiry_at

    def countered(self, choice: Choice, reveal_window: int) -> "Wager":
        """Copy with the opponent's choice set and the deadline pushed out."""
        return replace(self, counter_choice=Choice(choice),
                       expiry_at=self.expiry_at + reveal_window)

    def resolved(self) -> "Wager":
        """Terminal copy: no stake, no parties, deadline kept."""
        return replace(self, amount=0, opponent=ZERO_ADDRESS, counter_choice=Choice.NONE)

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "expiry_at": self.expiry_at,
            "opponent": self.opponent,
            "counter_choice": self.counter_choice.name,
        }


EMPTY_WAGER = Wager()

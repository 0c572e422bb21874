# rps_wager/resolution.py
# Fixed rock/paper/scissors beats-relation and payout split
from typing import Dict, Tuple

from .commitment import validate_choice
from .wager_types import Choice, Outcome

# choice -> the choice it defeats
BEATS: Dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.PAPER: Choice.ROCK,
    Choice.SCISSORS: Choice.PAPER,
}


def resolve(choice, counter_choice) -> Outcome:
    """Outcome for the revealed bettor choice against the opponent's choice."""
    mine = validate_choice(choice)
    theirs = validate_choice(counter_choice)
    if theirs == BEATS[mine]:
        return Outcome.BETTOR_WINS
    if mine == theirs:
        return Outcome.TIE
    return Outcome.OPPONENT_WINS


def split(outcome: Outcome, amount: int) -> Tuple[int, int]:
    """(bettor payout, opponent payout) for one side's net stake."""
    if outcome is Outcome.TIE:
        return amount, amount
    if outcome is Outcome.BETTOR_WINS:
        return 2 * amount, 0
    return 0, 2 * amount

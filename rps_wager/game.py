# rps_wager/game.py
# Commit-reveal rock/paper/scissors wager engine
import logging
from typing import Callable, List, Optional

from algosdk import encoding

from .clock import Clock, SystemClock
from .commitment import app_address as _app_address
from .commitment import commit as _commit
from .commitment import validate_choice
from .config import GameConfig
from .errors import (
    AlreadyCountered, AlreadyResolved, AmountMismatch, CannotReclaimCountered,
    CommissionUncovered, DuplicateWager, ExpiryTooLarge, InvalidOrExpiredWager,
    NoOpponent, NotOpponent, NotYetExpired, OnlyBettorCanClaim,
    OnlyOpponentCanClaim, OpponentHasNotCountered, SystemPaused, Unauthorized,
    WagerError, WagerExpired,
)
from .events import (
    CommissionChanged, Event, WagerCountered, WagerPlaced, WagerReclaimed,
    WagerTied, WagerVerified, Withdrawal,
)
from .gate import AdminGate, OwnerGate
from .ledger import InMemoryWagerRepository, WagerRepository
from .payout import Payout, PullPayout
from .resolution import resolve, split
from .wager_types import ZERO_ADDRESS, Choice, Outcome, Wager

log = logging.getLogger(__name__)


def _short(identifier: bytes) -> str:
    return bytes(identifier).hex()[:12]


class RockPaperScissors:
    """
    Two-party wager over one commitment per record.

    Flow:
        bettor    place(hash(choice, secret, bettor), delta, opponent, deposit)
        opponent  counter(hash, choice, amount + commission)
        bettor    verify(choice, secret)          -> outcome, payout
    After expiry exactly one of bettor_reclaim / opponent_reclaim can succeed,
    depending on whether the wager was countered.

    Every operation checks all preconditions before touching state and
    moves value last. The clock is read once per operation.
    """

    def __init__(self, config: Optional[GameConfig] = None, owner: str = ZERO_ADDRESS,
                 repository: Optional[WagerRepository] = None,
                 clock: Optional[Clock] = None,
                 gate: Optional[AdminGate] = None,
                 payout: Optional[Payout] = None,
                 app_address: Optional[str] = None):
        self.config = config or GameConfig()
        self.repository = repository if repository is not None else InMemoryWagerRepository()
        self.clock = clock or SystemClock()
        self.gate = gate or OwnerGate(owner, alive=not self.config.paused)
        self.payout = payout or PullPayout()
        self.app_address = app_address or _app_address(self.config.app_id)
        self._commission = self.config.commission
        self._max_expiry = self.config.max_expiry
        self.house_balance = 0
        self.forfeited = 0
        self._listeners: List[Callable[[Event], None]] = []

    # ---- accessors ----

    @property
    def commission(self) -> int:
        return self._commission

    @property
    def max_expiry(self) -> int:
        return self._max_expiry

    def wager(self, identifier: bytes) -> Wager:
        return self.repository.get(identifier)

    def balance_of(self, address: str) -> int:
        return self.payout.balance_of(address)

    def commit(self, choice, secret, identity: str) -> bytes:
        """Commitment identifier for this instance. Pure; reveals nothing."""
        return _commit(choice, secret, identity, self.app_address)

    def subscribe(self, listener: Callable[[Event], None]):
        self._listeners.append(listener)

    # ---- internals ----

    def _emit(self, event: Event):
        log.info("%s %s", event.name, event.to_dict())
        for listener in self._listeners:
            listener(event)

    def _reject(self, error: WagerError):
        log.debug("rejected: %s", error.reason)
        raise error

    def _require_active(self):
        if not self.gate.is_active():
            self._reject(SystemPaused())

    def _settle(self, identifier: bytes, wager: Wager, payments):
        """
        Close the record, then pay each (recipient, amount) leg in order.

        If the first leg fails nothing has left the system, so the record is
        put back and the error propagates. Once a leg has gone out the record
        stays closed; a later failed leg is credited to the recipient's
        withdrawable balance.
        """
        self.repository.put(identifier, wager.resolved())
        paid = False
        for recipient, amount in payments:
            if amount <= 0:
                continue
            try:
                self.payout.pay(recipient, amount)
            except Exception:
                if not paid:
                    self.repository.put(identifier, wager)
                    raise
                log.warning("payment of %d to %s failed for %s, credited to balance",
                            amount, recipient, _short(identifier), exc_info=True)
                self.payout.credit(recipient, amount)
            paid = True

    # ---- administration ----

    def change_commission(self, caller: str, new_commission: int):
        self._require_active()
        if not self.gate.is_authorized(caller):
            self._reject(Unauthorized())
        if new_commission < 0:
            raise ValueError(f"commission must be >= 0, got {new_commission}")
        old = self._commission
        self._commission = int(new_commission)
        self._emit(CommissionChanged(old=old, new=self._commission))

    # ---- wager lifecycle ----

    def place(self, caller: str, identifier: bytes, expiry_delta: int,
              opponent: str, deposit: int) -> Wager:
        """Open a wager under a commitment identifier with deposit = stake + commission.

        An identifier is single-use: once resolved its record stays behind and
        a new placement under it is a duplicate.
        """
        self._require_active()
        if deposit <= self._commission:
            self._reject(CommissionUncovered())
        if not opponent or opponent == ZERO_ADDRESS or not encoding.is_valid_address(opponent):
            self._reject(NoOpponent())
        if self.repository.exists(identifier):
            self._reject(DuplicateWager())
        if expiry_delta < 0 or expiry_delta > self._max_expiry:
            self._reject(ExpiryTooLarge())

        now = self.clock.now()
        wager = Wager(
            amount=deposit - self._commission,
            expiry_at=now + expiry_delta,
            opponent=opponent,
            counter_choice=Choice.NONE,
        )
        self.repository.put(identifier, wager)
        self.house_balance += self._commission
        log.info("placed %s amount=%d expiry_at=%d", _short(identifier), wager.amount, wager.expiry_at)
        self._emit(WagerPlaced(bettor=caller, opponent=opponent,
                               amount=wager.amount, expiry_delta=expiry_delta))
        return wager

    def counter(self, caller: str, identifier: bytes, choice, deposit: int) -> Wager:
        """Match the stake with a plaintext choice. Opens the reveal window."""
        self._require_active()
        wager = self.repository.get(identifier)
        if not wager.is_live or caller != wager.opponent:
            self._reject(NotOpponent())
        choice = validate_choice(choice)
        if wager.is_countered:
            self._reject(AlreadyCountered())
        if deposit != wager.amount + self._commission:
            self._reject(AmountMismatch())
        now = self.clock.now()
        if wager.is_expired(now):
            self._reject(WagerExpired())

        updated = wager.countered(choice, self._max_expiry)
        self.repository.put(identifier, updated)
        self.house_balance += self._commission
        log.info("countered %s with %s, reveal by %d", _short(identifier), choice.name, updated.expiry_at)
        self._emit(WagerCountered(opponent=caller, choice=choice))
        return updated

    def verify(self, caller: str, choice, secret) -> Outcome:
        """Reveal the committed choice and settle the wager."""
        self._require_active()
        identifier = self.commit(choice, secret, caller)
        choice = Choice(choice)
        wager = self.repository.get(identifier)
        now = self.clock.now()
        if not self.repository.exists(identifier) or wager.is_expired(now):
            self._reject(InvalidOrExpiredWager())
        if not wager.is_live:
            self._reject(AlreadyResolved())
        if not wager.is_countered:
            self._reject(OpponentHasNotCountered())

        amount, opponent, counter_choice = wager.amount, wager.opponent, wager.counter_choice
        outcome = resolve(choice, counter_choice)
        to_bettor, to_opponent = split(outcome, amount)
        self._settle(identifier, wager, [(caller, to_bettor), (opponent, to_opponent)])

        log.info("verified %s: %s", _short(identifier), outcome.value)
        if outcome is Outcome.TIE:
            self._emit(WagerTied(bettor=caller, opponent=opponent, amount=amount, choice=choice))
        else:
            winner = caller if outcome is Outcome.BETTOR_WINS else opponent
            self._emit(WagerVerified(winner=winner, amount=2 * amount,
                                     bettor_choice=choice, opponent_choice=counter_choice))
        return outcome

    def bettor_reclaim(self, caller: str, choice, secret) -> int:
        """Recover the stake of a wager nobody countered before expiry."""
        self._require_active()
        identifier = self.commit(choice, secret, caller)
        wager = self.repository.get(identifier)
        if not wager.is_live:
            self._reject(OnlyBettorCanClaim())
        if not wager.is_expired(self.clock.now()):
            self._reject(NotYetExpired())
        if wager.is_countered:
            self._reject(CannotReclaimCountered())

        self._settle(identifier, wager, [(caller, wager.amount)])
        self._emit(WagerReclaimed(claimant=caller, amount=wager.amount))
        return wager.amount

    def opponent_reclaim(self, caller: str, identifier: bytes) -> int:
        """
        Claim a countered wager the bettor never revealed.

        Only the bettor's net stake is paid; the opponent's own matching
        stake stays with the house as forfeited.
        """
        self._require_active()
        wager = self.repository.get(identifier)
        if not wager.is_live:
            self._reject(AlreadyResolved())
        if caller != wager.opponent:
            self._reject(OnlyOpponentCanClaim())
        if not wager.is_expired(self.clock.now()):
            self._reject(NotYetExpired())
        if not wager.is_countered:
            self._reject(OpponentHasNotCountered())

        self._settle(identifier, wager, [(caller, wager.amount)])
        self.forfeited += wager.amount
        self._emit(WagerReclaimed(claimant=caller, amount=wager.amount))
        return wager.amount

    def withdraw(self, caller: str, amount: int) -> int:
        """Drain credited balance. Returns what is left."""
        self._require_active()
        try:
            remaining = self.payout.withdraw(caller, amount)
        except WagerError as e:
            log.debug("rejected: %s", e.reason)
            raise
        self._emit(Withdrawal(account=caller, amount=amount))
        return remaining

# rps_wager/payout.py
# Payout strategies: pull (credit balances, withdraw on demand) or push (transfer now)
import logging
from collections import defaultdict
from typing import Callable, Dict

from .errors import InsufficientBalance

log = logging.getLogger(__name__)

Transfer = Callable[[str, int], None]


class RecordingTransfer:
    """Transfer that tallies value sent out of the system per address."""

    def __init__(self):
        self.sent: Dict[str, int] = defaultdict(int)

    def __call__(self, recipient: str, amount: int) -> None:
        self.sent[recipient] += amount

    @property
    def total(self) -> int:
        return sum(self.sent.values())


class Payout:
    """
    Moves resolved value to a party.

    Every strategy keeps a withdrawable balance ledger. pay() is the
    strategy's normal route; credit() always lands in the ledger.

    Usage:
        payout = PullPayout(transfer)
        payout.pay(winner, 2000)        # credited
        payout.withdraw(winner, 2000)   # transfer(winner, 2000)
    """

    def __init__(self, transfer: Transfer = None):
        self.transfer = transfer or RecordingTransfer()
        self.balances: Dict[str, int] = defaultdict(int)

    def pay(self, recipient: str, amount: int) -> None:
        raise NotImplementedError

    def credit(self, recipient: str, amount: int) -> None:
        if amount <= 0:
            return
        self.balances[recipient] += amount
        log.debug("credited %d to %s", amount, recipient)

    def balance_of(self, address: str) -> int:
        return self.balances.get(address, 0)

    def withdraw(self, caller: str, amount: int) -> int:
        current = self.balance_of(caller)
        if amount <= 0 or amount > current:
            raise InsufficientBalance()
        self.balances[caller] = current - amount
        try:
            self.transfer(caller, amount)
        except Exception:
            self.balances[caller] = current
            raise
        return self.balances[caller]


class PullPayout(Payout):
    def pay(self, recipient: str, amount: int) -> None:
        self.credit(recipient, amount)


class PushPayout(Payout):
    """
    Transfers at resolution time. The balance ledger only holds value the
    engine could not push after another leg of the same settlement went out.
    """

    def pay(self, recipient: str, amount: int) -> None:
        if amount <= 0:
            return
        self.transfer(recipient, amount)
        log.debug("sent %d to %s", amount, recipient)

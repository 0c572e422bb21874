# rps_wager/errors.py
# Precondition failures. Each carries a stable reason string for clients and tests.


class WagerError(Exception):
    reason = "Wager operation rejected"

    def __init__(self, reason: str = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class ChoiceInvalid(WagerError):
    reason = "Invalid choice"


class SecretInvalid(WagerError):
    reason = "Secret must be at most 32 bytes"


class CommissionUncovered(WagerError):
    reason = "You need to at least cover the commission"


class NoOpponent(WagerError):
    reason = "You need to provide an opponent"


class DuplicateWager(WagerError):
    reason = "Duplicate bet!"


class ExpiryTooLarge(WagerError):
    reason = "Expiry should be less than maxExpiry"


class NotOpponent(WagerError):
    reason = "You are not listed as opponent"


class AlreadyCountered(WagerError):
    reason = "Bet already countered"


class AmountMismatch(WagerError):
    reason = "You must bet the agreed amount"


class WagerExpired(WagerError):
    reason = "Bet has expired"


class InvalidOrExpiredWager(WagerError):
    reason = "Invalid or expired bet"


class AlreadyResolved(WagerError):
    reason = "Bet already verified"


class OpponentHasNotCountered(WagerError):
    reason = "Your opponent has not placed a bet yet"


class NotYetExpired(WagerError):
    reason = "Bet has not expired yet"


class CannotReclaimCountered(WagerError):
    reason = "Cannot reclaim countered bet"


class OnlyOpponentCanClaim(WagerError):
    reason = "Only opponent can claim"


class OnlyBettorCanClaim(WagerError):
    reason = "Unauthorized claim or bet verified"


class InsufficientBalance(WagerError):
    reason = "Insufficient balance"


class Unauthorized(WagerError):
    reason = "Ownable: caller is not the owner"


class SystemPaused(WagerError):
    reason = "Contract is not alive"

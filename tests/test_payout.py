import pytest

from rps_wager import Choice, GameConfig, Outcome, PullPayout, PushPayout, RecordingTransfer, RockPaperScissors
from rps_wager import errors
from conftest import OWNER, PLAYER1, PLAYER2

def _game(clock, payout):
    return RockPaperScissors(GameConfig(commission=10000, max_expiry=600), owner=OWNER,
                             clock=clock, payout=payout)

def _countered(game, theirs, secret=b"secret"):
    bet_hash = game.commit(Choice.ROCK, secret, PLAYER1)
    game.place(PLAYER1, bet_hash, 60, PLAYER2, deposit=11000)
    game.counter(PLAYER2, bet_hash, theirs, deposit=11000)
    return bet_hash

def test_pull_payout_credits_then_withdraws():
    transfer = RecordingTransfer()
    payout = PullPayout(transfer)
    payout.pay(PLAYER1, 1500)
    payout.pay(PLAYER1, 0)
    assert payout.balance_of(PLAYER1) == 1500
    assert transfer.total == 0

    assert payout.withdraw(PLAYER1, 500) == 1000
    assert transfer.sent[PLAYER1] == 500
    for bad in (0, -1, 1001):
        with pytest.raises(errors.InsufficientBalance):
            payout.withdraw(PLAYER1, bad)
    assert payout.balance_of(PLAYER1) == 1000

def test_pull_withdraw_restores_balance_when_transfer_fails():
    def broken(recipient, amount):
        raise RuntimeError("transfer failed")
    payout = PullPayout(broken)
    payout.pay(PLAYER1, 700)
    with pytest.raises(RuntimeError):
        payout.withdraw(PLAYER1, 700)
    assert payout.balance_of(PLAYER1) == 700

def test_push_payout_transfers_at_resolution(clock):
    transfer = RecordingTransfer()
    game = _game(clock, PushPayout(transfer))
    _countered(game, Choice.SCISSORS)
    game.verify(PLAYER1, Choice.ROCK, b"secret")

    assert transfer.sent == {PLAYER1: 2000}
    assert game.balance_of(PLAYER1) == 0
    with pytest.raises(errors.InsufficientBalance):
        game.withdraw(PLAYER1, 2000)

def test_push_tie_pays_both_sides(clock):
    transfer = RecordingTransfer()
    game = _game(clock, PushPayout(transfer))
    _countered(game, Choice.ROCK)
    game.verify(PLAYER1, Choice.ROCK, b"secret")
    assert transfer.sent == {PLAYER1: 1000, PLAYER2: 1000}

def test_reentrant_verify_sees_resolved_wager(clock):
    attempts = []
    transfer = RecordingTransfer()

    def reenter(recipient, amount):
        transfer(recipient, amount)
        try:
            game.verify(PLAYER1, Choice.ROCK, b"secret")
        except errors.WagerError as e:
            attempts.append(e)

    game = _game(clock, PushPayout(reenter))
    bet_hash = _countered(game, Choice.SCISSORS)
    game.verify(PLAYER1, Choice.ROCK, b"secret")

    assert [type(e) for e in attempts] == [errors.AlreadyResolved]
    assert transfer.total == 2000
    assert game.wager(bet_hash).amount == 0

def test_reentrant_reclaim_sees_resolved_wager(clock):
    attempts = []

    def reenter(recipient, amount):
        try:
            game.opponent_reclaim(PLAYER2, bet_hash)
        except errors.WagerError as e:
            attempts.append(e)

    game = _game(clock, PushPayout(reenter))
    bet_hash = _countered(game, Choice.PAPER)
    clock.advance(661)
    assert game.opponent_reclaim(PLAYER2, bet_hash) == 1000
    assert [type(e) for e in attempts] == [errors.AlreadyResolved]

def test_failed_transfer_leaves_wager_untouched(clock):
    def broken(recipient, amount):
        raise RuntimeError("transfer failed")

    game = _game(clock, PushPayout(broken))
    bet_hash = _countered(game, Choice.SCISSORS)
    before = game.wager(bet_hash)
    with pytest.raises(RuntimeError):
        game.verify(PLAYER1, Choice.ROCK, b"secret")
    assert game.wager(bet_hash) == before

def test_tie_with_one_failed_leg_credits_it_and_closes_wager(clock):
    transfer = RecordingTransfer()
    broken = {PLAYER2}

    def flaky(recipient, amount):
        if recipient in broken:
            raise RuntimeError("transfer failed")
        transfer(recipient, amount)

    game = _game(clock, PushPayout(flaky))
    bet_hash = _countered(game, Choice.ROCK)
    assert game.verify(PLAYER1, Choice.ROCK, b"secret") is Outcome.TIE
    assert transfer.sent == {PLAYER1: 1000}
    assert game.balance_of(PLAYER2) == 1000
    assert game.wager(bet_hash).amount == 0

    with pytest.raises(errors.AlreadyResolved):
        game.verify(PLAYER1, Choice.ROCK, b"secret")
    assert transfer.sent == {PLAYER1: 1000}

    broken.clear()
    assert game.withdraw(PLAYER2, 1000) == 0
    assert transfer.sent == {PLAYER1: 1000, PLAYER2: 1000}
    assert transfer.total == 2000

# rps_wager/contract.py
# Commit-reveal rock/paper/scissors wager as an Algorand application (PyTeal, TEAL v8)
#
# Wagers live in boxes keyed by the 32-byte commitment; payouts are credited to
# per-address balance boxes and drained with "withdraw" (pull payments only).
# The application account must be funded by its creator to cover box MBR.
from pyteal import *

# -------- Global keys --------
COMMISSION_KEY = Bytes("commission")  # uint: microAlgos kept per deposit
MAX_EXPIRY_KEY = Bytes("max_expiry")  # uint: seconds; also the reveal window
OWNER_KEY = Bytes("owner")            # bytes: creator addr
ALIVE_KEY = Bytes("alive")            # uint (bool)
HOUSE_KEY = Bytes("house")            # uint: accrued commission

# -------- Boxes --------
# wager box, key = commitment: amount(8) | expiry_at(8) | counter_choice(8) | opponent(32)
AMOUNT_AT = Int(0)
EXPIRY_AT = Int(8)
CHOICE_AT = Int(16)
OPPONENT_AT = Int(24)
WAGER_BOX_SIZE = 56
BALANCE_PREFIX = Bytes("bal")         # balance box, key = "bal" || addr, value = itob(balance)

# -------- Choices --------
NONE = Int(0)
ROCK = Int(1)
PAPER = Int(2)
SCISSORS = Int(3)

# -------- Methods (application_args[0]) --------
OP_COMMISSION = "commission"
OP_ALIVE = "alive"
OP_BET = "bet"
OP_COUNTER = "counter"
OP_VERIFY = "verify"
OP_BETTOR_RECLAIM = "bettor_reclaim"
OP_OPPONENT_RECLAIM = "opponent_reclaim"
OP_WITHDRAW = "withdraw"


def balance_key(account: Expr) -> Expr:
    return Concat(BALANCE_PREFIX, account)


def commitment(choice: Expr, secret: Expr) -> Expr:
    """Same digest as rps_wager.commitment.commit for the calling account."""
    return Sha256(Concat(Itob(choice), secret, Txn.sender(), Global.current_application_address()))


@Subroutine(TealType.uint64)
def is_valid_choice(choice: Expr) -> Expr:
    return And(choice >= ROCK, choice <= SCISSORS)


@Subroutine(TealType.uint64)
def defeats(choice: Expr) -> Expr:
    """The choice beaten by `choice`."""
    return Cond(
        [choice == ROCK, SCISSORS],
        [choice == PAPER, ROCK],
        [choice == SCISSORS, PAPER],
    )


@Subroutine(TealType.none)
def credit(account: Expr, amount: Expr) -> Expr:
    current = App.box_get(balance_key(account))
    return Seq(
        current,
        App.box_put(
            balance_key(account),
            Itob(If(current.hasValue(), Btoi(current.value()), Int(0)) + amount),
        ),
    )


@Subroutine(TealType.none)
def close_wager(wager_id: Expr) -> Expr:
    # resolved boxes stay behind with amount 0 and the deadline kept
    return Seq(
        App.box_replace(wager_id, AMOUNT_AT, Itob(Int(0))),
        App.box_replace(wager_id, CHOICE_AT, Itob(NONE)),
        App.box_replace(wager_id, OPPONENT_AT, Global.zero_address()),
    )


@Subroutine(TealType.none)
def check_deposit(expected_sender: Expr) -> Expr:
    # deposits arrive as [Payment(sender -> app), AppCall]
    payment = Gtxn[0]
    return Seq(
        Assert(Global.group_size() == Int(2)),
        Assert(Txn.group_index() == Int(1)),
        Assert(payment.type_enum() == TxnType.Payment),
        Assert(payment.sender() == expected_sender),
        Assert(payment.receiver() == Global.current_application_address()),
        Assert(payment.close_remainder_to() == Global.zero_address()),
        Assert(payment.rekey_to() == Global.zero_address()),
    )


def approval_program() -> Expr:
    is_owner = Txn.sender() == App.globalGet(OWNER_KEY)
    is_alive = App.globalGet(ALIVE_KEY) == Int(1)
    commission = App.globalGet(COMMISSION_KEY)
    max_expiry = App.globalGet(MAX_EXPIRY_KEY)
    now = Global.latest_timestamp()

    # create(commission, max_expiry, paused)
    on_create = Seq(
        App.globalPut(OWNER_KEY, Txn.sender()),
        App.globalPut(COMMISSION_KEY, Btoi(Txn.application_args[0])),
        App.globalPut(MAX_EXPIRY_KEY, Btoi(Txn.application_args[1])),
        App.globalPut(ALIVE_KEY, Btoi(Txn.application_args[2]) == Int(0)),
        App.globalPut(HOUSE_KEY, Int(0)),
        Approve(),
    )

    # ---- Administration ----

    # commission(new: uint)  [owner]
    do_commission = Seq(
        Assert(is_alive),
        Assert(is_owner),
        App.globalPut(COMMISSION_KEY, Btoi(Txn.application_args[1])),
        Log(Bytes("CommissionChanged")),
        Approve(),
    )

    # alive(flag: uint)  [owner]
    do_alive = Seq(
        Assert(is_owner),
        App.globalPut(ALIVE_KEY, Btoi(Txn.application_args[1]) != Int(0)),
        Approve(),
    )

    # ---- Wager lifecycle ----

    # bet(identifier: bytes32, expiry_delta: uint, opponent: addr)  [Payment, AppCall]
    bet_id = Txn.application_args[1]
    bet_delta = Btoi(Txn.application_args[2])
    bet_opponent = Txn.application_args[3]
    existing = App.box_length(bet_id)
    do_bet = Seq(
        Assert(is_alive),
        check_deposit(Txn.sender()),
        Assert(Len(bet_id) == Int(32)),
        Assert(Gtxn[0].amount() > commission),
        Assert(Len(bet_opponent) == Int(32)),
        Assert(bet_opponent != Global.zero_address()),
        existing,
        Assert(Not(existing.hasValue())),
        Assert(bet_delta <= max_expiry),
        App.box_put(
            bet_id,
            Concat(
                Itob(Gtxn[0].amount() - commission),
                Itob(now + bet_delta),
                Itob(NONE),
                bet_opponent,
            ),
        ),
        App.globalPut(HOUSE_KEY, App.globalGet(HOUSE_KEY) + commission),
        Log(Bytes("WagerPlaced")),
        Approve(),
    )

    # counter(identifier: bytes32, choice: uint)  [Payment, AppCall]
    counter_id = Txn.application_args[1]
    counter_choice = Btoi(Txn.application_args[2])
    countered = App.box_get(counter_id)
    do_counter = Seq(
        Assert(is_alive),
        check_deposit(Txn.sender()),
        countered,
        Assert(countered.hasValue()),
        Assert(Extract(countered.value(), OPPONENT_AT, Int(32)) == Txn.sender()),
        Assert(is_valid_choice(counter_choice)),
        Assert(ExtractUint64(countered.value(), CHOICE_AT) == NONE),
        Assert(Gtxn[0].amount() == ExtractUint64(countered.value(), AMOUNT_AT) + commission),
        Assert(now <= ExtractUint64(countered.value(), EXPIRY_AT)),
        App.box_replace(counter_id, CHOICE_AT, Itob(counter_choice)),
        App.box_replace(
            counter_id,
            EXPIRY_AT,
            Itob(ExtractUint64(countered.value(), EXPIRY_AT) + max_expiry),
        ),
        App.globalPut(HOUSE_KEY, App.globalGet(HOUSE_KEY) + commission),
        Log(Bytes("WagerCountered")),
        Approve(),
    )

    # verify(choice: uint, secret: bytes32)
    reveal_choice = Btoi(Txn.application_args[1])
    reveal_secret = Txn.application_args[2]
    wager_id = ScratchVar(TealType.bytes)
    stake = ScratchVar(TealType.uint64)
    opponent = ScratchVar(TealType.bytes)
    opponent_choice = ScratchVar(TealType.uint64)
    revealed = App.box_get(wager_id.load())
    do_verify = Seq(
        Assert(is_alive),
        Assert(is_valid_choice(reveal_choice)),
        Assert(Len(reveal_secret) == Int(32)),
        wager_id.store(commitment(reveal_choice, reveal_secret)),
        revealed,
        Assert(revealed.hasValue()),
        Assert(now <= ExtractUint64(revealed.value(), EXPIRY_AT)),
        Assert(ExtractUint64(revealed.value(), AMOUNT_AT) > Int(0)),
        Assert(ExtractUint64(revealed.value(), CHOICE_AT) != NONE),
        stake.store(ExtractUint64(revealed.value(), AMOUNT_AT)),
        opponent.store(Extract(revealed.value(), OPPONENT_AT, Int(32))),
        opponent_choice.store(ExtractUint64(revealed.value(), CHOICE_AT)),
        close_wager(wager_id.load()),
        If(opponent_choice.load() == reveal_choice)
        .Then(Seq(
            credit(Txn.sender(), stake.load()),
            credit(opponent.load(), stake.load()),
            Log(Bytes("WagerTied")),
        ))
        .ElseIf(opponent_choice.load() == defeats(reveal_choice))
        .Then(Seq(
            credit(Txn.sender(), stake.load() * Int(2)),
            Log(Bytes("WagerVerified")),
        ))
        .Else(Seq(
            credit(opponent.load(), stake.load() * Int(2)),
            Log(Bytes("WagerVerified")),
        )),
        Approve(),
    )

    # bettor_reclaim(choice: uint, secret: bytes32)  [expired, never countered]
    reclaim_id = ScratchVar(TealType.bytes)
    unanswered = App.box_get(reclaim_id.load())
    do_bettor_reclaim = Seq(
        Assert(is_alive),
        Assert(is_valid_choice(reveal_choice)),
        Assert(Len(reveal_secret) == Int(32)),
        reclaim_id.store(commitment(reveal_choice, reveal_secret)),
        unanswered,
        Assert(unanswered.hasValue()),
        Assert(ExtractUint64(unanswered.value(), AMOUNT_AT) > Int(0)),
        Assert(now > ExtractUint64(unanswered.value(), EXPIRY_AT)),
        Assert(ExtractUint64(unanswered.value(), CHOICE_AT) == NONE),
        stake.store(ExtractUint64(unanswered.value(), AMOUNT_AT)),
        close_wager(reclaim_id.load()),
        credit(Txn.sender(), stake.load()),
        Log(Bytes("WagerReclaimed")),
        Approve(),
    )

    # opponent_reclaim(identifier: bytes32)  [expired, countered, never revealed]
    forfeit_id = Txn.application_args[1]
    forfeited = App.box_get(forfeit_id)
    do_opponent_reclaim = Seq(
        Assert(is_alive),
        forfeited,
        Assert(forfeited.hasValue()),
        Assert(ExtractUint64(forfeited.value(), AMOUNT_AT) > Int(0)),
        Assert(Extract(forfeited.value(), OPPONENT_AT, Int(32)) == Txn.sender()),
        Assert(now > ExtractUint64(forfeited.value(), EXPIRY_AT)),
        Assert(ExtractUint64(forfeited.value(), CHOICE_AT) != NONE),
        stake.store(ExtractUint64(forfeited.value(), AMOUNT_AT)),
        close_wager(forfeit_id),
        credit(Txn.sender(), stake.load()),
        Log(Bytes("WagerReclaimed")),
        Approve(),
    )

    # withdraw(amount: uint)  caller covers the inner payment fee
    withdraw_amount = Btoi(Txn.application_args[1])
    held = App.box_get(balance_key(Txn.sender()))
    do_withdraw = Seq(
        Assert(is_alive),
        held,
        Assert(held.hasValue()),
        Assert(withdraw_amount > Int(0)),
        Assert(withdraw_amount <= Btoi(held.value())),
        App.box_put(balance_key(Txn.sender()), Itob(Btoi(held.value()) - withdraw_amount)),
        InnerTxnBuilder.Begin(),
        InnerTxnBuilder.SetFields({
            TxnField.type_enum: TxnType.Payment,
            TxnField.receiver: Txn.sender(),
            TxnField.amount: withdraw_amount,
            TxnField.fee: Int(0),
        }),
        InnerTxnBuilder.Submit(),
        Log(Bytes("Withdrawal")),
        Approve(),
    )

    on_noop = Cond(
        [Txn.application_args[0] == Bytes(OP_COMMISSION), do_commission],
        [Txn.application_args[0] == Bytes(OP_ALIVE), do_alive],
        [Txn.application_args[0] == Bytes(OP_BET), do_bet],
        [Txn.application_args[0] == Bytes(OP_COUNTER), do_counter],
        [Txn.application_args[0] == Bytes(OP_VERIFY), do_verify],
        [Txn.application_args[0] == Bytes(OP_BETTOR_RECLAIM), do_bettor_reclaim],
        [Txn.application_args[0] == Bytes(OP_OPPONENT_RECLAIM), do_opponent_reclaim],
        [Txn.application_args[0] == Bytes(OP_WITHDRAW), do_withdraw],
    )

    program = Cond(
        [Txn.application_id() == Int(0), on_create],
        [Txn.on_completion() == OnComplete.NoOp, on_noop],
        [Int(1), Reject()],
    )
    return program


def clear_state_program() -> Expr:
    return Approve()


if __name__ == "__main__":
    print(compileTeal(approval_program(), mode=Mode.Application, version=8))

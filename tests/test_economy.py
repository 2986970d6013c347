from uuid import uuid4

from rooster_ranch.economy import EconomyLedger


def test_unknown_owner_has_zero_balance() -> None:
    ledger = EconomyLedger()
    assert ledger.get_balance(uuid4()) == 0.0


def test_set_balance_clamps_negative_to_zero() -> None:
    ledger = EconomyLedger()
    owner = uuid4()
    ledger.set_balance(owner, -25)
    assert ledger.get_balance(owner) == 0.0

    ledger.set_balance(owner, 12.5)
    assert ledger.get_balance(owner) == 12.5


def test_deposit_ignores_non_positive_amounts() -> None:
    ledger = EconomyLedger()
    owner = uuid4()
    ledger.deposit(owner, 0)
    ledger.deposit(owner, -3)
    assert ledger.get_balance(owner) == 0.0

    ledger.deposit(owner, 10)
    ledger.deposit(owner, 2.5)
    assert ledger.get_balance(owner) == 12.5


def test_withdraw_refuses_overdraft_and_non_positive() -> None:
    ledger = EconomyLedger()
    owner = uuid4()
    ledger.deposit(owner, 5)

    assert ledger.withdraw(owner, 6) is False
    assert ledger.withdraw(owner, 0) is False
    assert ledger.withdraw(owner, -1) is False
    assert ledger.get_balance(owner) == 5

    assert ledger.withdraw(owner, 5) is True
    assert ledger.get_balance(owner) == 0


def test_balance_never_negative_over_mixed_operations() -> None:
    ledger = EconomyLedger()
    owner = uuid4()
    for amount in (3, -7, 0.5, 100, -2, 8):
        ledger.deposit(owner, amount)
        ledger.withdraw(owner, abs(amount) * 1.5)
        assert ledger.get_balance(owner) >= 0


def test_load_document_skips_malformed_entries(caplog) -> None:
    ledger = EconomyLedger()
    good = uuid4()
    caplog.set_level("WARNING", logger="rooster_ranch.economy")

    loaded = ledger.load_document({str(good): 42.0, "not-a-uuid": 5, str(uuid4()): "lots", str(uuid4()): True})

    assert loaded == 1
    assert ledger.get_balance(good) == 42.0
    assert sum(record.getMessage() == "economy_entry_skipped" for record in caplog.records) == 3


def test_non_finite_amounts_leave_balance_untouched() -> None:
    ledger = EconomyLedger()
    owner = uuid4()
    ledger.deposit(owner, 10)

    assert ledger.withdraw(owner, float("nan")) is False
    assert ledger.withdraw(owner, float("inf")) is False
    ledger.deposit(owner, float("nan"))
    ledger.deposit(owner, float("inf"))
    ledger.set_balance(owner, float("nan"))

    assert ledger.get_balance(owner) == 10
    assert ledger.to_document() == {str(owner): 10}

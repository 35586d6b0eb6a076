"""Tests for banking and finance rules."""

import pytest

from voicecommands.commands.parsers import finance


def _parse(text: str):
    text = text.strip()
    return finance.parse(text.lower(), text)


def test_expense_with_dollar_amount():
    result = _parse("add expense of $45.50 for groceries")
    assert result.command.to_dict() == {"type": "add_expense", "amount": 45.5, "category": "groceries"}
    assert result.confidence == 0.95


def test_spent_phrasing():
    result = _parse("I spent 20 dollars on lunch")
    assert result.command.to_dict() == {"type": "add_expense", "amount": 20.0, "category": "lunch"}
    assert result.confidence == 0.9


def test_expense_without_number_is_refused():
    assert _parse("add expense of lots for food") is None


def test_monthly_budget():
    result = _parse("set a monthly budget for dining to 300")
    assert result.command.to_dict() == {
        "type": "set_budget",
        "category": "dining",
        "amount": 300.0,
        "period": "monthly",
    }


def test_category_before_budget():
    result = _parse("set a grocery budget of 400 dollars")
    assert result.command.to_dict() == {"type": "set_budget", "category": "grocery", "amount": 400.0}


def test_determiner_is_not_a_budget_category():
    result = _parse("set the budget to 300")
    assert result is None


@pytest.mark.parametrize("text", ["check my balance", "what's my balance", "how much money do I have"])
def test_balance_phrasings(text):
    assert _parse(text).name == "check_balance"


def test_named_account_balance():
    result = _parse("check my savings balance")
    assert result.command.to_dict() == {"type": "check_balance", "accountId": "savings"}


def test_generic_account_word_is_not_an_account():
    result = _parse("check my bank balance")
    assert result.command.to_dict() == {"type": "check_balance"}


def test_recent_transactions():
    result = _parse("show my recent transactions")
    assert result.command.to_dict() == {"type": "list_transactions", "filter": "recent"}


def test_categorize_transaction():
    result = _parse("categorize transaction 123 as groceries")
    assert result.command.to_dict() == {
        "type": "categorize_transaction",
        "transactionId": "123",
        "category": "groceries",
    }


def test_financial_summary_period():
    result = _parse("how am I doing financially this month")
    assert result.command.to_dict() == {"type": "get_financial_summary", "period": "month"}


def test_cash_flow():
    assert _parse("show me my cash flow").name == "get_cash_flow"

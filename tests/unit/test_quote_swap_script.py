"""Tests for the quote_swap command line script."""

import sys

import pytest

from scripts import quote_swap


def _run(monkeypatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["quote_swap.py", *args])
    return quote_swap.main()


class TestQuoteSwap:
    """Tests for quote_swap.main."""

    def test_exact_in(self, monkeypatch, capsys):
        code = _run(monkeypatch, "--reserves", "1000000", "1000000", "--amount-in", "1000")

        assert code == 0
        assert capsys.readouterr().out.strip() == "amount_out: 996"

    def test_exact_out(self, monkeypatch, capsys):
        code = _run(
            monkeypatch,
            "--reserves", "1000000", "1000000",
            "--fee", "3", "1000",
            "--amount-out", "996",
        )

        assert code == 0
        assert capsys.readouterr().out.strip() == "amount_in: 1000"

    def test_engine_error_exits_nonzero(self, monkeypatch, capsys):
        code = _run(monkeypatch, "--reserves", "1000", "1000", "--amount-out", "1000")

        assert code == 1
        assert "amount_in" not in capsys.readouterr().out

    def test_requires_amount(self, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, "--reserves", "1000", "1000")

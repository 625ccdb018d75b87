"""Tests for the keypad Calculator session."""

from __future__ import annotations

import logging

import pytest

from calcpad.core.dispatch import Dispatcher
from calcpad.core.session import Calculator


def press(calc: Calculator, keys: str) -> None:
    for key in keys:
        calc.handle_input(key)


@pytest.fixture
def rendered() -> list[str]:
    return []


@pytest.fixture
def calc(rendered: list[str]) -> Calculator:
    return Calculator(renderer=rendered.append)


class TestInput:
    def test_initial_display(self, calc: Calculator) -> None:
        assert calc.display == "0"
        assert calc.is_new_calculation

    def test_typing_builds_expression(self, calc: Calculator, rendered: list[str]) -> None:
        press(calc, "12+3")
        assert calc.expression == "12+3"
        assert rendered == ["1", "12", "12+", "12+3"]

    def test_consecutive_operators_rejected(self, calc: Calculator) -> None:
        press(calc, "5+*-2")
        assert calc.expression == "5+2"

    def test_second_decimal_point_rejected(self, calc: Calculator) -> None:
        press(calc, "1.2.3")
        assert calc.expression == "1.23"

    def test_decimal_point_allowed_in_next_number(self, calc: Calculator) -> None:
        press(calc, "1.5+2.5")
        assert calc.expression == "1.5+2.5"

    def test_leading_zeros_rejected(self, calc: Calculator) -> None:
        press(calc, "00")
        assert calc.expression == "0"
        press(calc, "+007")
        assert calc.expression == "0+07"

    def test_unknown_value_rejected(self, calc: Calculator) -> None:
        calc.handle_input("x")
        assert calc.expression == ""

    def test_current_number(self, calc: Calculator) -> None:
        press(calc, "12*3.4")
        assert calc.current_number() == "3.4"
        calc.handle_input("+")
        assert calc.current_number() == ""

    def test_delete_last_char(self, calc: Calculator, rendered: list[str]) -> None:
        press(calc, "123")
        calc.delete_last_char()
        assert calc.expression == "12"
        assert rendered[-1] == "12"

    def test_delete_on_empty(self, calc: Calculator) -> None:
        calc.delete_last_char()
        assert calc.display == "0"


class TestCalculate:
    def test_equals(self, calc: Calculator, rendered: list[str]) -> None:
        press(calc, "2+3*4=")
        assert calc.expression == "14"
        assert calc.last_result == "14"
        assert calc.is_new_calculation
        assert rendered[-1] == "14"

    def test_digit_after_result_starts_fresh(self, calc: Calculator) -> None:
        press(calc, "2+2=")
        press(calc, "7")
        assert calc.expression == "7"

    def test_operator_after_result_continues(self, calc: Calculator) -> None:
        press(calc, "2+2=")
        press(calc, "*3=")
        assert calc.expression == "12"

    def test_equals_on_empty_is_noop(self, calc: Calculator) -> None:
        calc.handle_input("=")
        assert calc.display == "0"
        assert calc.last_result == ""

    def test_syntax_error_shows_error(self, calc: Calculator, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="calcpad.core.session")
        press(calc, "(1+=")
        assert calc.display == "Error"
        assert calc.is_new_calculation
        assert "Calculator error" in caplog.text

    def test_division_by_zero_shows_error(self, calc: Calculator) -> None:
        press(calc, "1/0=")
        assert calc.display == "Error"

    def test_input_after_error_replaces_it(self, calc: Calculator) -> None:
        press(calc, "1/0=")
        press(calc, "4")
        assert calc.expression == "4"

    def test_operator_after_error_does_not_append_to_error(self, calc: Calculator) -> None:
        press(calc, "1/0=")
        press(calc, "-5=")
        assert calc.expression == "-5"

    def test_custom_error_text_and_precision(self) -> None:
        calc = Calculator(precision=3, error_text="ERR")
        calc.enter("1/3")
        assert calc.display == "0.333"
        calc.enter("1/0")
        assert calc.display == "ERR"

    def test_all_clear(self, calc: Calculator) -> None:
        press(calc, "9*9=")
        calc.handle_input("AC")
        assert calc.expression == ""
        assert calc.last_result == ""
        assert calc.display == "0"


class TestKeyboard:
    @pytest.mark.parametrize(
        ("keys", "expected"),
        [
            (["1", "+", "2", "Enter"], "3"),
            (["5", "Escape"], "0"),
            (["4", "2", "Backspace"], "4"),
            (["(", "2", ")", "%", "2", "Enter"], "0"),
        ],
    )
    def test_key_mapping(self, calc: Calculator, keys: list[str], expected: str) -> None:
        for key in keys:
            assert calc.handle_key(key)
        assert calc.display == expected

    def test_unknown_key_ignored(self, calc: Calculator) -> None:
        assert calc.handle_key("Shift") is False
        assert calc.handle_key("a") is False
        assert calc.display == "0"


class TestEnter:
    def test_enter_line(self, calc: Calculator, rendered: list[str]) -> None:
        assert calc.enter("  (2+3)*4 ") == "20"
        assert rendered == ["20"]

    def test_enter_bypasses_keypad_rules(self, calc: Calculator) -> None:
        # Typed lines are parsed as a whole, so unary minus after an operator works
        assert calc.enter("2*-3") == "-6"


class TestDispatchedRendering:
    def test_keystroke_storm_renders_once(self, scheduler) -> None:
        rendered: list[str] = []
        render = Dispatcher(rendered.append, 50, scheduler=scheduler)
        calc = Calculator(renderer=render.invoke)

        for key in "12+30=":
            calc.handle_input(key)
            scheduler.advance_ms(10)
        scheduler.advance_ms(50)

        assert rendered == ["42"]

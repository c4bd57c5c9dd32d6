from __future__ import annotations

import math

import pytest

from surf_math.equations import (
    Answer,
    DegenerateSystemError,
    Equation,
    EquationSystem,
    check_answer,
    determinant,
    exact_solution,
    format_equation,
    has_integer_solution,
    has_unique_solution,
    is_acceptable,
    is_well_formed,
    parse_answer,
    parse_answer_value,
    solve,
)

WAVE = EquationSystem(Equation(1, 1, 12), Equation(2, -1, 3))


def _system(*coeffs: float) -> EquationSystem:
    a1, b1, c1, a2, b2, c2 = coeffs
    return EquationSystem(Equation(a1, b1, c1), Equation(a2, b2, c2))


def test_solve_wave_system() -> None:
    assert determinant(WAVE) == -3
    assert solve(WAVE) == (5, 7)


def test_check_answer_accepts_exact_solution() -> None:
    assert check_answer(WAVE, Answer(5, 7))


def test_check_answer_residual_equal_to_tolerance_is_rejected() -> None:
    # eq1 residual is exactly 0.001
    assert not check_answer(WAVE, Answer(5, 6.999))


def test_check_answer_within_tolerance() -> None:
    assert check_answer(WAVE, Answer(5.0004, 7))
    assert check_answer(WAVE, Answer(5, 7.0009))


def test_check_answer_custom_tolerance() -> None:
    assert check_answer(WAVE, Answer(5, 6.999), tolerance=0.01)
    assert not check_answer(WAVE, Answer(5, 7.0009), tolerance=0.0001)


@pytest.mark.parametrize("x,y", [(5, 8), (7, 5), (0, 12), (-5, -7)])
def test_check_answer_rejects_wrong_pairs(x: float, y: float) -> None:
    assert not check_answer(WAVE, Answer(x, y))


@pytest.mark.parametrize(
    "x,y",
    [(math.nan, 7), (5, math.nan), (math.inf, 7), (5, -math.inf)],
)
def test_check_answer_non_finite_is_false(x: float, y: float) -> None:
    assert check_answer(WAVE, Answer(x, y)) is False


@pytest.mark.parametrize(
    "coeffs",
    [
        (1, 1, 12, 2, -1, 3),
        (3, 2, 7, 1, -4, 0),
        (2, 3, 1, 4, -5, 2),
        (-5, 4, 3, 1, 1, 1),
        (7, 3, 10, 2, 5, -1),
    ],
)
def test_solution_always_checks(coeffs: tuple[int, ...]) -> None:
    system = _system(*coeffs)
    x, y = solve(system)
    assert check_answer(system, Answer(x, y))


@pytest.mark.parametrize(
    "coeffs",
    [
        (1, 0, 5, 0, 1, 3),
        (0, 1, 5, 1, 1, 3),
        (1, 1, 5, 0, 1, 3),
        (1, 1, 5, 1, 0, 3),
    ],
)
def test_zero_coefficient_is_not_well_formed(coeffs: tuple[int, ...]) -> None:
    system = _system(*coeffs)
    assert not is_well_formed(system)
    assert not is_acceptable(system)


def test_dependent_system_has_no_unique_solution() -> None:
    system = _system(1, 2, 3, 2, 4, 6)
    assert is_well_formed(system)
    assert not has_unique_solution(system)
    assert not is_acceptable(system)
    with pytest.raises(DegenerateSystemError):
        solve(system)
    with pytest.raises(DegenerateSystemError):
        exact_solution(system)


def test_parallel_system_has_no_unique_solution() -> None:
    assert not has_unique_solution(_system(1, 1, 1, 2, 2, 5))


def test_tiny_non_zero_determinant_is_unique() -> None:
    assert has_unique_solution(_system(1, 1, 1, 1, 1.000001, 2))


def test_integer_solution_gate() -> None:
    halves = _system(2, 2, 1, 2, -2, 0)  # x = y = 1/4
    assert is_acceptable(halves)
    assert not has_integer_solution(halves)
    assert not is_acceptable(halves, require_integer_solution=True)
    assert is_acceptable(WAVE, require_integer_solution=True)


def test_exact_solution_is_rational() -> None:
    x, y = exact_solution(_system(2, 2, 1, 2, -2, 0))
    assert str(x) == "1/4"
    assert str(y) == "1/4"


@pytest.mark.parametrize(
    "text,expected",
    [("5", 5.0), (" -3.5 ", -3.5), ("1e2", 100.0), ("7.", 7.0)],
)
def test_parse_answer_value(text: str, expected: float) -> None:
    assert parse_answer_value(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "5,5", "x=5", None])
def test_parse_answer_value_malformed_is_nan(text: str | None) -> None:
    assert math.isnan(parse_answer_value(text))


def test_malformed_answer_is_incorrect_not_an_error() -> None:
    assert check_answer(WAVE, parse_answer("five", "7")) is False
    assert check_answer(WAVE, parse_answer("", "")) is False
    assert check_answer(WAVE, parse_answer("5", " 7 ")) is True


@pytest.mark.parametrize(
    "eq,expected",
    [
        (Equation(1, 1, 12), "x + y = 12"),
        (Equation(2, -1, 3), "2x - y = 3"),
        (Equation(-1, 3, 0), "-x + 3y = 0"),
        (Equation(-4, -5, -9), "-4x - 5y = -9"),
        (Equation(2.0, 0.5, 1.0), "2x + 0.5y = 1"),
    ],
)
def test_format_equation(eq: Equation, expected: str) -> None:
    assert format_equation(eq) == expected


def test_system_dict_round_trip() -> None:
    assert EquationSystem.from_dict(WAVE.to_dict()) == WAVE

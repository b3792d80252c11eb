"""
Тесты для Interaction Loop и CLI

Проверяет:
1. InteractiveSession: меню, ввод операндов, повтор при ошибке, Continue/Quit
2. Восстановление после арифметических ошибок (цикл продолжается)
3. InputClosed на конце ввода
4. click-команды: repl (по умолчанию) и eval (текст / --json, коды выхода)
"""

import json

import pytest
from click.testing import CliRunner

from src.calculator import CalculatorEngine, EngineConfig
from src.cli import __version__
from src.cli.main import cli
from src.cli.session import InputClosed, InteractiveSession
from src.core.domain import Operation

MENU = "1.) Add 2.) Subtract 3.) Multiply 4.) Divide 5.) Modulus 6.) Power 7.) Square Root"
PARSE_MESSAGE = "Invalid input. Please enter a valid number (either integer or floating point)."


class ScriptedIO:
    """Ввод из списка строк, вывод в список."""

    def __init__(self, *lines: str):
        self._lines = list(lines)
        self.output: list[str] = []

    def read_line(self):
        if not self._lines:
            return None
        return self._lines.pop(0) + "\n"

    def write_line(self, text: str) -> None:
        self.output.append(text)


def make_session(*lines: str, engine: CalculatorEngine | None = None):
    io = ScriptedIO(*lines)
    session = InteractiveSession(engine=engine, read_line=io.read_line, write_line=io.write_line)
    return session, io


# =============================================================================
# SESSION
# =============================================================================


class TestInteractiveSession:
    """Тесты для InteractiveSession"""

    def test_add_then_quit(self) -> None:
        session, io = make_session("1", "2", "3", "2")

        assert session.run() == 1
        assert io.output == [
            "Please choose the desired operation:",
            MENU,
            "Please enter the first number:",
            "Please enter the second number:",
            "Result is: 5",
            "Would you like to continue or quit?",
            "1.) Continue | 2.) Quit",
        ]

    def test_square_root_prompts_single_number(self) -> None:
        session, io = make_session("7", "2", "2")

        session.run()
        assert "Please enter the number:" in io.output
        assert "Please enter the first number:" not in io.output
        assert (
            "Square root result is: "
            "1.414213562373095048801688724209698078569671875376948073176679737990732478462107038850387534327641573"
        ) in io.output

    def test_continue_runs_another_calculation(self) -> None:
        session, io = make_session("4", "1", "4", "1", "6", "2", "10", "2")

        assert session.run() == 2
        assert "Result is: 0.25" in io.output
        assert "Result is: 1024" in io.output
        assert io.output.count(MENU) == 2

    def test_invalid_number_is_reprompted(self) -> None:
        """Некорректное число: сообщение и повторный ввод того же операнда"""
        session, io = make_session("3", "abc", "1.2.3", "  2.5  ", "4", "2")

        session.run()
        assert io.output.count(PARSE_MESSAGE) == 2
        assert "Result is: 10" in io.output

    def test_invalid_choice_is_reprompted(self) -> None:
        session, io = make_session("x", "", "1", "1", "1", "2")

        session.run()
        assert io.output.count("Invalid input. Please enter a valid integer choice.") == 2
        assert "Result is: 2" in io.output

    def test_choice_is_trimmed(self) -> None:
        session, io = make_session("  5 ", "7", "3", " 2")

        session.run()
        assert "Result is: 1" in io.output

    def test_unknown_menu_code_returns_to_menu(self) -> None:
        """Код вне 1–7: без вычисления и без вопроса Continue/Quit"""
        session, io = make_session("9", "0", "1", "1", "1", "2")

        assert session.run() == 1
        assert io.output.count("Please choose a valid transaction!") == 2
        assert io.output.count(MENU) == 3
        assert io.output.count("Would you like to continue or quit?") == 1

    def test_arithmetic_error_does_not_stop_loop(self) -> None:
        session, io = make_session("4", "1", "0", "1", "7", "-4", "1", "6", "5", "-1", "2")

        assert session.run() == 3
        assert "Error: Division by zero" in io.output
        assert "Error: Cannot compute the square root of a negative number" in io.output
        assert "Error: Exponent must be a non-negative integer" in io.output

    def test_invalid_continue_choice(self) -> None:
        session, io = make_session("1", "1", "1", "3", "maybe", "2")

        session.run()
        assert io.output.count("Invalid input, please enter 1 for Continue or 2 for Quit.") == 1
        assert io.output.count("Invalid input. Please enter a valid integer choice.") == 1
        assert io.output.count("Would you like to continue or quit?") == 2

    def test_run_once_returns_result(self) -> None:
        session, _ = make_session("5", "-7", "3")

        result = session.run_once()
        assert result is not None
        assert result.operation is Operation.MODULUS
        assert result.value == "-1"

    def test_run_once_unknown_code_returns_none(self) -> None:
        session, io = make_session("8")

        assert session.run_once() is None
        assert io.output[-1] == "Please choose a valid transaction!"

    def test_engine_config_is_used(self) -> None:
        engine = CalculatorEngine(EngineConfig(max_exponent=2))
        session, io = make_session("6", "2", "3", "2", engine=engine)

        session.run()
        assert "Error: Exponent must be a non-negative integer" in io.output

    @pytest.mark.parametrize(
        "lines",
        [(), ("1",), ("1", "2"), ("1", "2", "3"), ("1", "2", "3", "5")],
    )
    def test_end_of_input_raises(self, lines: tuple) -> None:
        session, _ = make_session(*lines)

        with pytest.raises(InputClosed):
            session.run()


# =============================================================================
# CLI: REPL
# =============================================================================


class TestReplCommand:
    """Тесты для `precisecalc` / `precisecalc repl`"""

    def test_default_command_runs_loop(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, [], input="1\n2\n3\n2\n")

        assert result.exit_code == 0
        assert "Please choose the desired operation:" in result.output
        assert "Result is: 5" in result.output

    def test_repl_subcommand(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["repl"], input="4\n1\n3\n2\n")

        assert result.exit_code == 0
        assert "Result is: 0." + "3" * 100 in result.output

    def test_closed_input_exits_with_error(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["repl"], input="1\n2\n")

        assert result.exit_code == 1
        assert "Input stream closed." in result.output

    def test_max_exponent_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--max-exponent", "5", "repl"], input="6\n2\n6\n2\n")

        assert result.exit_code == 0
        assert "Error: Exponent must be a non-negative integer" in result.output

    def test_max_exponent_env(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["eval", "power", "2", "6"], env={"PRECISECALC_MAX_EXPONENT": "5"}
        )

        assert result.exit_code == 1
        assert "Error: Exponent must be a non-negative integer" in result.output

    def test_negative_max_exponent_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--max-exponent", "-1", "repl"], input="")

        assert result.exit_code == 2

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# CLI: EVAL
# =============================================================================


class TestEvalCommand:
    """Тесты для `precisecalc eval`"""

    @pytest.mark.parametrize(
        "args, expected",
        [
            (["add", "2", "3"], "Result is: 5"),
            (["divide", "1", "4"], "Result is: 0.25"),
            (["modulus", "7", "3"], "Result is: 1"),
            (["6", "2", "10"], "Result is: 1024"),
            (["square-root", "4"], "Square root result is: 2"),
            (["SQUARE_ROOT", "6.25"], "Square root result is: 2.5"),
            (["subtract", "--", "5", "-3"], "Result is: 8"),
        ],
    )
    def test_success(self, args: list, expected: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", *args])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    @pytest.mark.parametrize(
        "args, message",
        [
            (["divide", "1", "0"], "Error: Division by zero"),
            (["modulus", "5", "0"], "Error: Division by zero in modulus"),
            (["7", "--", "-4"], "Error: Cannot compute the square root of a negative number"),
            (["power", "--", "5", "-1"], "Error: Exponent must be a non-negative integer"),
            (["add", "1", "abc"], PARSE_MESSAGE),
        ],
    )
    def test_failure_exit_code(self, args: list, message: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", *args])

        assert result.exit_code == 1
        assert message in result.output

    def test_json_success(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", "square_root", "2", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["ok"] is True
        assert payload["operation"] == "square_root"
        assert payload["value"].startswith("1.41421356237309504880")
        assert payload["error_kind"] is None

    def test_json_failure(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", "--json", "divide", "1", "0"])

        assert result.exit_code == 1
        assert json.loads(result.output) == {
            "operation": "divide",
            "ok": False,
            "value": None,
            "error_kind": "division_by_zero",
            "message": "Error: Division by zero",
        }

    def test_json_parse_error(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", "--json", "add", "1", "1.2.3"])

        assert result.exit_code == 1
        assert json.loads(result.output)["error_kind"] == "parse_error"

    @pytest.mark.parametrize("operation", ["sqrt", "0", "8", "plus"])
    def test_unknown_operation(self, operation: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", operation, "1", "2"])

        assert result.exit_code == 2
        assert "unknown operation" in result.output

    @pytest.mark.parametrize("args", [["add", "1"], ["square_root", "1", "2"], ["1", "1", "2", "3"]])
    def test_wrong_arity(self, args: list) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", *args])

        assert result.exit_code == 2
        assert "operand(s)" in result.output

    def test_missing_operands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["eval", "add"])

        assert result.exit_code == 2

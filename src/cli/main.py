"""Main CLI interface for precisecalc.

Без подкоманды запускает интерактивную сессию; `eval` вычисляет одну
операцию и завершает процесс.
"""

import json
import logging

import click
from pydantic import ValidationError

from src.calculator.engine import CalculatorEngine, EngineConfig
from src.cli import __version__
from src.cli.session import InputClosed, InteractiveSession
from src.core.contracts import validate_calculation_request, validate_calculation_result
from src.core.domain.calculation import CalculationRequest, CalculationResult
from src.core.domain.operation import Operation
from src.core.errors import ErrorKind
from src.core.logging_setup import DEFAULT_LOG_LEVEL, setup_logging
from src.core.precision import MAX_EXPONENT

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="precisecalc")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--max-exponent",
    type=click.IntRange(min=0),
    default=MAX_EXPONENT,
    show_default=True,
    envvar="PRECISECALC_MAX_EXPONENT",
    help="Largest exponent accepted by Power",
)
@click.pass_context
def cli(ctx, debug, max_exponent):
    """Arbitrary-precision decimal calculator.

    Runs the interactive menu when no command is given.
    """
    setup_logging(logging.DEBUG if debug else DEFAULT_LOG_LEVEL)
    ctx.obj = {"engine": CalculatorEngine(EngineConfig(max_exponent=max_exponent))}
    logger.debug("max_exponent=%d", max_exponent)

    if ctx.invoked_subcommand is None:
        ctx.invoke(repl)


@cli.command()
@click.pass_context
def repl(ctx):
    """Interactive menu loop (default command)."""
    session = InteractiveSession(engine=ctx.obj["engine"])
    try:
        session.run()
    except InputClosed:
        click.echo("Input stream closed.", err=True)
        ctx.exit(1)


@cli.command(name="eval", context_settings={"ignore_unknown_options": True})
@click.argument("operation")
@click.argument("operands", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the result as a JSON payload")
@click.pass_context
def eval_command(ctx, operation, operands, as_json):
    """Evaluate one OPERATION (name or menu code 1-7) over OPERANDS.

    \b
    Examples:
      precisecalc eval divide 1 3
      precisecalc eval 6 2 10
      precisecalc eval square_root 2 --json
    """
    selected = _resolve_operation(operation)
    if len(operands) != selected.arity:
        raise click.UsageError(
            f"{selected.value} requires {selected.arity} operand(s), got {len(operands)}"
        )

    try:
        request = CalculationRequest(operation=selected, operands=operands)
    except ValidationError as e:
        logger.debug("rejected request: %s", e)
        result = CalculationResult.failure(selected, ErrorKind.PARSE_ERROR)
    else:
        if as_json:
            validate_calculation_request(request.model_dump(mode="json"))
        result = ctx.obj["engine"].evaluate(request)

    if as_json:
        payload = result.model_dump(mode="json")
        validate_calculation_result(payload)
        click.echo(json.dumps(payload))
    else:
        click.echo(result.display_text())

    if not result.ok:
        ctx.exit(1)


def _resolve_operation(text: str) -> Operation:
    """Операция по имени (divide, square-root) или коду меню (1–7)."""
    try:
        if text.isdigit():
            return Operation.from_menu_code(int(text))
        return Operation(text.lower().replace("-", "_"))
    except ValueError:
        choices = ", ".join(operation.value for operation in Operation)
        raise click.BadParameter(
            f"unknown operation {text!r} (expected 1-7 or one of: {choices})",
            param_hint="OPERATION",
        ) from None


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

"""
Тесты для CLI (command loop + display)

Покрытие:
- format_rate / render_best_rates
- DisplayManager (help, ошибки, таблицы, JSON)
- CommandSession: dispatch команд, сообщения ошибок, Critical → clear
- Typer entrypoint
"""

import io
import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from src.cli.display import DisplayManager, format_rate, render_best_rates
from src.cli.main import app
from src.cli.session import CommandSession
from src.core.domain import (
    ExchangeCurrencyPair,
    ExchangeRateRequest,
    GraphError,
    OptimalRateWithPath,
    PriceUpdateRequestValidationError,
)
from src.graph import QuoteGraph
from src.observability import setup_logging


KRAKEN_LINE = ":u 2017-11-01T09:42:23+00:00 KRAKEN BtC UsD 1000.0 0.0009"
GDAX_LINE = ":u 2017-11-01T09:42:23+00:00 GDAX BTC USD 1001.0 0.0008"

EXPECTED_ENVELOPE = "\n".join(
    [
        "BEST_RATES_BEGIN KRAKEN BTC GDAX USD 1001",
        "KRAKEN, BTC",
        "GDAX, BTC",
        "GDAX, USD",
        "BEST_RATES_END",
    ]
)


# =============================================================================
# HELPERS
# =============================================================================


def make_display() -> tuple[DisplayManager, io.StringIO]:
    """Helper: DisplayManager, пишущий в буфер."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, soft_wrap=True, highlight=False, color_system=None)
    return DisplayManager(console), buffer


def make_session(json_output: bool = False) -> tuple[CommandSession, io.StringIO]:
    display, buffer = make_display()
    return CommandSession(graph=QuoteGraph(), display=display, json_output=json_output), buffer


def line_reader(lines: list[str]):
    """Helper: источник строк, завершающийся EOFError."""
    remaining = iter(lines)

    def read_line() -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    return read_line


def best_rate_request() -> ExchangeRateRequest:
    return ExchangeRateRequest(
        source_exchange="KRAKEN",
        source_currency="BTC",
        destination_exchange="GDAX",
        destination_currency="USD",
    )


def best_rate_optimal() -> OptimalRateWithPath:
    return OptimalRateWithPath(
        rate=1001.0,
        path=(
            ExchangeCurrencyPair(exchange="KRAKEN", currency="BTC"),
            ExchangeCurrencyPair(exchange="GDAX", currency="BTC"),
            ExchangeCurrencyPair(exchange="GDAX", currency="USD"),
        ),
    )


# =============================================================================
# RENDERING
# =============================================================================


class TestRendering:
    """Тесты для format_rate и render_best_rates"""

    @pytest.mark.parametrize(
        "rate,expected",
        [(1001.0, "1001"), (1002.0, "1002"), (100.0, "100"), (0.0009, "0.0009"), (1000.5, "1000.5")],
    )
    def test_format_rate(self, rate: float, expected: str) -> None:
        assert format_rate(rate) == expected

    @pytest.mark.parametrize(
        "rate,expected",
        [
            (1e20, "100000000000000000000"),
            (1.5e16, "15000000000000000"),
            (1e-05, "0.00001"),
            (1.5e-07, "0.00000015"),
        ],
    )
    def test_format_rate_never_scientific(self, rate: float, expected: str) -> None:
        """Очень большие и очень малые курсы печатаются в десятичной записи"""
        text = format_rate(rate)

        assert text == expected
        assert "e" not in text.lower()

    def test_envelope_with_small_rate(self) -> None:
        optimal = OptimalRateWithPath(rate=1e-05, path=best_rate_optimal().path)

        first_line = render_best_rates(best_rate_request(), optimal).splitlines()[0]

        assert first_line == "BEST_RATES_BEGIN KRAKEN BTC GDAX USD 0.00001"

    def test_envelope(self) -> None:
        assert render_best_rates(best_rate_request(), best_rate_optimal()) == EXPECTED_ENVELOPE


# =============================================================================
# DISPLAY
# =============================================================================


class TestDisplayManager:
    """Тесты для DisplayManager"""

    def test_help_lists_every_command(self) -> None:
        display, buffer = make_display()

        display.show_help()

        output = buffer.getvalue()
        assert "case-sensitive" in output
        for command in (":u", ":r", ":n", ":p", ":c", ":h", ":q"):
            assert command in output

    def test_best_rate(self) -> None:
        display, buffer = make_display()

        display.show_best_rate(best_rate_request(), best_rate_optimal())

        assert buffer.getvalue().strip() == EXPECTED_ENVELOPE

    def test_best_rate_json(self) -> None:
        display, buffer = make_display()

        display.show_best_rate_json(best_rate_request(), best_rate_optimal())

        payload = json.loads(buffer.getvalue())
        assert payload["rate"] == 1001.0
        assert payload["request"]["source_exchange"] == "KRAKEN"
        assert [hop["exchange"] for hop in payload["path"]] == ["KRAKEN", "GDAX", "GDAX"]

    def test_error_printed_verbatim(self) -> None:
        display, buffer = make_display()

        display.show_error("Invalid timestamp [not markup]")

        assert buffer.getvalue().strip() == "Invalid timestamp [not markup]"

    def test_invalid_command(self) -> None:
        display, buffer = make_display()

        display.show_invalid_command()

        assert buffer.getvalue().strip() == "Invalid Command"


# =============================================================================
# SESSION
# =============================================================================


class TestCommandSession:
    """Тесты для CommandSession"""

    def test_update_then_best_rate(self) -> None:
        session, buffer = make_session()

        session.handle_line(KRAKEN_LINE)
        session.handle_line(GDAX_LINE)
        session.handle_line(":r kraken btc gdax usd")

        assert EXPECTED_ENVELOPE in buffer.getvalue()

    def test_json_output(self) -> None:
        session, buffer = make_session(json_output=True)
        session.handle_line(KRAKEN_LINE)
        session.handle_line(GDAX_LINE)

        session.handle_line(":r KRAKEN BTC GDAX USD")

        payload = json.loads(buffer.getvalue())
        assert payload["rate"] == 1001.0
        assert len(payload["path"]) == 3

    def test_rejected_update_shows_message(self) -> None:
        session, buffer = make_session()

        session.handle_line(":u 2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1abc00 0.0009")

        assert PriceUpdateRequestValidationError.INVALID_FORWARD_FACTOR.message in buffer.getvalue()
        assert session.graph.get_nodes() == []

    def test_wrong_argument_count_for_rate_request(self) -> None:
        session, buffer = make_session()

        session.handle_line(":r KRAKEN BTC GDAX")

        assert "exchange-rate-request arguments must be 4" in buffer.getvalue()

    def test_path_not_found_message(self) -> None:
        session, buffer = make_session()
        session.handle_line(KRAKEN_LINE)

        session.handle_line(":r KRAKEN BTC GDAX USD")

        assert GraphError.PATH_NOT_FOUND.message in buffer.getvalue()

    def test_invalid_path_message(self) -> None:
        session, buffer = make_session()
        session.handle_line(KRAKEN_LINE)

        session.handle_line(":r KRAKEN BTC KRAKEN BTC")

        assert GraphError.INVALID_PATH.message in buffer.getvalue()

    def test_critical_clears_graph(self, monkeypatch: pytest.MonkeyPatch) -> None:
        session, buffer = make_session()
        session.handle_line(KRAKEN_LINE)
        session.handle_line(GDAX_LINE)
        monkeypatch.setattr("src.graph.engine.reconstruct_hops", lambda matrices, start, end: [0, 3])

        session.handle_line(":r KRAKEN BTC GDAX USD")

        assert GraphError.CRITICAL.message in buffer.getvalue()
        assert session.graph.get_nodes() == []
        assert session.graph.get_paths() == []

    def test_clear_command(self) -> None:
        session, _ = make_session()
        session.handle_line(KRAKEN_LINE)

        session.handle_line(":c")

        assert session.graph.get_nodes() == []

    def test_display_nodes_and_paths(self) -> None:
        session, buffer = make_session()
        session.handle_line(KRAKEN_LINE)

        session.handle_line(":n")
        session.handle_line(":p")

        output = buffer.getvalue()
        assert "KRAKEN" in output
        assert "USD" in output
        assert "Forward" in output
        assert "Backward" in output

    def test_unknown_command(self) -> None:
        session, buffer = make_session()

        assert session.handle_line(":x something") is True
        assert "Invalid Command" in buffer.getvalue()

    def test_commands_are_case_sensitive(self) -> None:
        session, buffer = make_session()

        session.handle_line(":Q")

        assert "Invalid Command" in buffer.getvalue()

    def test_blank_line_ignored(self) -> None:
        session, buffer = make_session()

        assert session.handle_line("   ") is True
        assert buffer.getvalue() == ""

    def test_quit(self) -> None:
        session, _ = make_session()

        assert session.handle_line(":q") is False

    def test_run_stops_on_quit(self) -> None:
        session, buffer = make_session()

        session.run(line_reader([KRAKEN_LINE, ":q", GDAX_LINE]))

        assert "Please use the following commands" in buffer.getvalue()
        assert len(session.graph.get_nodes()) == 2

    def test_run_stops_on_eof(self) -> None:
        session, _ = make_session()

        session.run(line_reader([KRAKEN_LINE, GDAX_LINE]))

        assert len(session.graph.get_nodes()) == 4


# =============================================================================
# ENTRYPOINT
# =============================================================================


class TestEntrypoint:
    """Тесты для Typer entrypoint"""

    def test_run_until_quit(self) -> None:
        runner = CliRunner()

        result = runner.invoke(
            app,
            ["--log-level", "ERROR"],
            input="\n".join([KRAKEN_LINE, GDAX_LINE, ":r KRAKEN BTC GDAX USD", ":q"]) + "\n",
        )
        setup_logging(level="WARNING")

        assert result.exit_code == 0
        assert "BEST_RATES_BEGIN KRAKEN BTC GDAX USD 1001" in result.output
        assert "GDAX, BTC" in result.output

    def test_no_debug_events_in_output_at_warning(self) -> None:
        """Debug-события не попадают между prompt и BEST_RATES envelope"""
        runner = CliRunner()

        result = runner.invoke(
            app,
            ["--log-level", "WARNING"],
            input="\n".join([KRAKEN_LINE, GDAX_LINE, ":r KRAKEN BTC GDAX USD", ":q"]) + "\n",
        )
        setup_logging(level="WARNING")

        assert result.exit_code == 0
        for event in ("paths_inserted", "bridge_paths_inserted", "best_rate_computed", "[debug"):
            assert event not in result.output
        for line in EXPECTED_ENVELOPE.splitlines():
            assert line in result.output

    def test_run_until_eof(self) -> None:
        runner = CliRunner()

        result = runner.invoke(app, ["--json-logs"], input="")
        setup_logging(level="WARNING")

        assert result.exit_code == 0
        assert "Please use the following commands" in result.output

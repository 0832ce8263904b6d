"""
Console display for the quote graph command loop
"""

from decimal import Decimal

from rich.console import Console
from rich.table import Table
from rich import box

from src.core.contracts import validate_optimal_rate
from src.core.domain import ExchangeRateRequest, Node, OptimalRateWithPath, Path

PROMPT = "◇◇〉"

PRICE_UPDATE_CMD = ":u"
RATE_REQUEST_CMD = ":r"
DISPLAY_NODE_CMD = ":n"
DISPLAY_PATH_CMD = ":p"
CLEAR_DATA_CMD = ":c"
HELP_CMD = ":h"
QUIT_CMD = ":q"

HELP_ROWS: list[tuple[str, str, str]] = [
    (PRICE_UPDATE_CMD, "Update price", "2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1000.0 0.0009"),
    (RATE_REQUEST_CMD, "Calculate optimal exchange rate", "KRAKEN BTC GDAX USD"),
    (DISPLAY_NODE_CMD, "Display all nodes", ""),
    (DISPLAY_PATH_CMD, "Display all paths", ""),
    (CLEAR_DATA_CMD, "Clear the existing data", ""),
    (HELP_CMD, "Display this help", ""),
    (QUIT_CMD, "Quit", ""),
]


def format_rate(rate: float) -> str:
    """Кратчайшая десятичная запись курса без экспоненты и хвостовых нулей.

    Examples:
        >>> format_rate(1001.0)
        '1001'
        >>> format_rate(1e-05)
        '0.00001'
    """
    # repr даёт кратчайшие значащие цифры; Decimal раскрывает экспоненту
    text = format(Decimal(repr(rate)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_best_rates(request: ExchangeRateRequest, optimal: OptimalRateWithPath) -> str:
    """
    Текстовый envelope best-rate результата:

        BEST_RATES_BEGIN <se> <sc> <de> <dc> <rate>
        <exchange>, <currency>
        ...
        BEST_RATES_END
    """
    lines = [
        f"BEST_RATES_BEGIN {request.source_exchange} {request.source_currency} "
        f"{request.destination_exchange} {request.destination_currency} {format_rate(optimal.rate)}"
    ]
    lines.extend(f"{pair.exchange}, {pair.currency}" for pair in optimal.path)
    lines.append("BEST_RATES_END")
    return "\n".join(lines)


class DisplayManager:
    """Manages all console output of the command loop using Rich"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(soft_wrap=True, highlight=False)

    def read_command(self) -> str:
        return self.console.input(f"[green]{PROMPT}[/green]")

    def show_help(self) -> None:
        self.console.print(
            "Please use the following commands to interact with the program.\n"
            "Please note that commands are case-sensitive.",
            style="green",
        )
        table = Table(box=box.SIMPLE, show_edge=False)
        table.add_column("Commands", style="green")
        table.add_column("Description")
        table.add_column("Usage", style="yellow")
        for command, description, example in HELP_ROWS:
            usage = f"{command} {example}".rstrip()
            table.add_row(command, description, usage)
        self.console.print(table)

    def show_best_rate(self, request: ExchangeRateRequest, optimal: OptimalRateWithPath) -> None:
        self.console.print(render_best_rates(request, optimal), style="blue", markup=False)

    def show_best_rate_json(self, request: ExchangeRateRequest, optimal: OptimalRateWithPath) -> None:
        """JSON payload по контракту optimal_rate (валидируется перед выводом)"""
        payload = optimal.to_contract(request)
        validate_optimal_rate(payload)
        self.console.print_json(data=payload)

    def show_error(self, message: str) -> None:
        self.console.print(message, style="red", markup=False)

    def show_invalid_command(self) -> None:
        self.console.print("Invalid Command", markup=False)

    def show_nodes(self, nodes: list[Node]) -> None:
        table = Table(title="Nodes", box=box.SIMPLE)
        table.add_column("Index", justify="right")
        table.add_column("Exchange")
        table.add_column("Currency")
        for node in nodes:
            table.add_row(str(node.index), node.exchange, node.currency)
        self.console.print(table)

    def show_paths(self, paths: list[Path], nodes: list[Node]) -> None:
        table = Table(title="Paths", box=box.SIMPLE)
        table.add_column("From")
        table.add_column("To")
        table.add_column("Weight", justify="right")
        table.add_column("Timestamp")
        table.add_column("Factor")
        for path in paths:
            start = nodes[path.start]
            end = nodes[path.end]
            table.add_row(
                f"{start.exchange} {start.currency}",
                f"{end.exchange} {end.currency}",
                format_rate(path.weight),
                path.timestamp.isoformat(),
                path.factor_type.value,
            )
        self.console.print(table)

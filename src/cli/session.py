"""Command loop — разбор строки команды и dispatch в граф.

Строка делится по whitespace; первый токен — команда, остальные — поля
запроса. Валидация и вычисления делегируются Validation Layer и QuoteGraph.
"""

from typing import Callable

from src.core.domain import GraphIntegrityViolation
from src.graph import QuoteGraph
from src.validation import (
    PriceUpdateValidator,
    validate_exchange_rate_input,
)
from src.observability.logging import get_logger

from .display import (
    CLEAR_DATA_CMD,
    DISPLAY_NODE_CMD,
    DISPLAY_PATH_CMD,
    HELP_CMD,
    PRICE_UPDATE_CMD,
    QUIT_CMD,
    RATE_REQUEST_CMD,
    DisplayManager,
)

logger = get_logger(__name__, layer="cli", component="session")


class CommandSession:
    """Одна интерактивная сессия: владеет графом на время жизни процесса."""

    def __init__(
        self,
        graph: QuoteGraph | None = None,
        display: DisplayManager | None = None,
        validator: PriceUpdateValidator | None = None,
        json_output: bool = False,
    ):
        self.graph = graph or QuoteGraph()
        self.display = display or DisplayManager()
        self.validator = validator or PriceUpdateValidator()
        self.json_output = json_output

    def run(self, read_line: Callable[[], str] | None = None) -> None:
        """
        Основной цикл: help, затем prompt → команда до :q или EOF.

        Args:
            read_line: источник строк (default — prompt в консоли)
        """
        read_line = read_line or self.display.read_command
        logger.info("session_started")
        self.display.show_help()

        while True:
            try:
                line = read_line()
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line):
                break

        logger.info("session_stopped", nodes=len(self.graph.get_nodes()))

    def handle_line(self, line: str) -> bool:
        """
        Обработка одной строки.

        Returns:
            False если сессию нужно завершить (:q), иначе True
        """
        args = line.split()
        if not args:
            return True

        command, fields = args[0], args[1:]

        if command == PRICE_UPDATE_CMD:
            self._price_update(fields)
        elif command == RATE_REQUEST_CMD:
            self._rate_request(fields)
        elif command == DISPLAY_NODE_CMD:
            self.display.show_nodes(self.graph.get_nodes())
        elif command == DISPLAY_PATH_CMD:
            self.display.show_paths(self.graph.get_paths(), self.graph.get_nodes())
        elif command == CLEAR_DATA_CMD:
            self.graph.clear()
        elif command == HELP_CMD:
            self.display.show_help()
        elif command == QUIT_CMD:
            return False
        else:
            self.display.show_invalid_command()

        return True

    def _price_update(self, fields: list[str]) -> None:
        result = self.validator.evaluate(fields, self.graph)
        if not result.accepted:
            self.display.show_error(result.error.message)
            return
        self.graph.update(result.request)

    def _rate_request(self, fields: list[str]) -> None:
        validation = validate_exchange_rate_input(fields)
        if not validation.accepted:
            self.display.show_error(validation.error.message)
            return

        request = validation.request
        try:
            result = self.graph.get_top_result(request)
        except GraphIntegrityViolation as e:
            # Граф неконсистентен, восстановление только через полный сброс
            logger.error("graph_reset_after_violation", details=e.details)
            self.display.show_error(e.error.message)
            self.graph.clear()
            return

        if not result.found:
            self.display.show_error(result.error.message)
        elif self.json_output:
            self.display.show_best_rate_json(request, result.optimal)
        else:
            self.display.show_best_rate(request, result.optimal)

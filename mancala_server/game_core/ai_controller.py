# mancala_server/game_core/ai_controller.py

import os
import threading
import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError

from . import constants as c
from .errors import GameError
from .search import select_move

# Настраиваем логгер для этого модуля
logger = logging.getLogger(__name__)


class AISearchTimeout(GameError):
    """AI search timed out"""
    code = 'AI_SEARCH_TIMEOUT'


class AIController:

    def __init__(self, max_workers=None, search_depth=c.DEFAULT_SEARCH_DEPTH, timeout=10.0):
        """
        Инициализирует контроллер ИИ с пулом потоков на основе
        количества CPU (минимум 1), если размер пула не задан.
        Использует 'search.select_move' для расчетов.
        """
        workers = max_workers or os.cpu_count() or 1
        self.executor = ThreadPoolExecutor(max_workers=workers)
        self.search_depth = search_depth
        self.timeout = timeout

        logger.info(f"Инициализирован. Глубина поиска: {search_depth}. Пул потоков: {workers} worker(ов).")

    def get_move(self, board, player, difficulty):
        """
        Считает ход в пуле потоков и ждет результат не дольше `timeout`.
        Возвращает индекс лунки или None (ходить нечем).
        """
        future = self.executor.submit(self._execute_calculation, list(board), player, difficulty)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.error(f"Поиск хода не уложился в {self.timeout} сек. (difficulty={difficulty}, player={player})")
            raise AISearchTimeout(f"AI search exceeded {self.timeout}s")

    def _execute_calculation(self, board, player, difficulty):
        """
        Выполняет основную работу: расчет хода.
        Этот метод выполняется в фоновом потоке.
        """
        tid = threading.current_thread().name
        started = time.monotonic()

        pit_index = select_move(board, player, difficulty, depth=self.search_depth)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.debug(f"({tid}) Ход ИИ: {pit_index} (difficulty={difficulty}, player={player}, {elapsed_ms} мс)")
        return pit_index

    def shutdown(self):
        self.executor.shutdown(wait=False)

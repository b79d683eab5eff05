# mancala_server/game_core/search.py
"""
Поиск хода для компьютерного соперника.

Три уровня:
- easy:   случайная непустая лунка;
- medium: жадная оценка одного хода со штрафом за ответы соперника;
- hard:   минимакс с альфа-бета отсечением фиксированной глубины.

Все функции работают на "сырых" данных (доска + номер игрока)
и не зависят от слоя сервисов.
"""

import math
import random
from typing import Optional

from . import constants as c
from .board_state import sow_seeds
from .utils import get_available_moves, get_other_player, get_store_pos, get_pit_range

# --- Веса для medium ---
EXTRA_TURN_BONUS = 100
CAPTURE_BONUS = 50
STORE_DIFF_WEIGHT = 10
OPPONENT_EXTRA_TURN_PENALTY = 30
OPPONENT_CAPTURE_PENALTY = 20

# --- Оценки для hard ---
WIN_SCORE = 1000
LOSS_SCORE = -1000
TIE_SCORE = 0


def select_move(board, player, difficulty, rng: Optional[random.Random] = None,
                depth: int = c.DEFAULT_SEARCH_DEPTH) -> Optional[int]:
    """
    Возвращает индекс лунки или None, если ходить нечем.
    Неизвестная сложность трактуется как easy.
    """
    available_moves = get_available_moves(board, player)
    if not available_moves:
        return None

    if difficulty == c.DIFFICULTY_MEDIUM:
        return _get_medium_move(board, player, available_moves)
    if difficulty == c.DIFFICULTY_HARD:
        return _get_hard_move(board, player, available_moves, depth)
    return _get_easy_move(available_moves, rng or random)


def _get_easy_move(available_moves, rng):
    return rng.choice(available_moves)


def _store_diff(board, player):
    return board[get_store_pos(player)] - board[get_store_pos(get_other_player(player))]


def _get_medium_move(board, player, available_moves):
    best_move = available_moves[0]
    best_score = -math.inf

    for move in available_moves:
        outcome = sow_seeds(board, move, player)
        score = 0

        if outcome.extra_turn:
            score += EXTRA_TURN_BONUS
        if outcome.captured:
            score += CAPTURE_BONUS

        score += _store_diff(outcome.board, player) * STORE_DIFF_WEIGHT

        # Штраф за каждый ответ соперника, дающий ему доп. ход или захват
        if not outcome.game_over:
            opponent = get_other_player(player)
            for reply in get_available_moves(outcome.board, opponent):
                reply_outcome = sow_seeds(outcome.board, reply, opponent)
                if reply_outcome.extra_turn:
                    score -= OPPONENT_EXTRA_TURN_PENALTY
                if reply_outcome.captured:
                    score -= OPPONENT_CAPTURE_PENALTY

        # Строгое сравнение: при равенстве остается первый найденный ход
        if score > best_score:
            best_score = score
            best_move = move

    return best_move


def _get_hard_move(board, player, available_moves, depth):
    best_move = available_moves[0]
    best_score = -math.inf

    for move in available_moves:
        outcome = sow_seeds(board, move, player)
        # Доп. ход: та же глубина, тот же (максимизирующий) игрок
        score = _minimax(
            outcome,
            depth if outcome.extra_turn else depth - 1,
            outcome.extra_turn,
            -math.inf,
            math.inf,
            player,
        )
        if score > best_score:
            best_score = score
            best_move = move

    return best_move


def _minimax(outcome, depth, maximizing, alpha, beta, root_player):
    if depth <= 0 or outcome.game_over:
        return evaluate_board(outcome.board, outcome.game_over, outcome.winner, root_player)

    mover = outcome.next_player
    available_moves = get_available_moves(outcome.board, mover)
    if not available_moves:
        return evaluate_board(outcome.board, outcome.game_over, outcome.winner, root_player)

    if maximizing:
        max_eval = -math.inf
        for move in available_moves:
            child = sow_seeds(outcome.board, move, mover)
            evaluation = _minimax(
                child,
                depth if child.extra_turn else depth - 1,
                child.extra_turn,
                alpha,
                beta,
                root_player,
            )
            max_eval = max(max_eval, evaluation)
            alpha = max(alpha, evaluation)
            if beta <= alpha:
                break
        return max_eval

    min_eval = math.inf
    for move in available_moves:
        child = sow_seeds(outcome.board, move, mover)
        evaluation = _minimax(
            child,
            depth if child.extra_turn else depth - 1,
            not child.extra_turn,
            alpha,
            beta,
            root_player,
        )
        min_eval = min(min_eval, evaluation)
        beta = min(beta, evaluation)
        if beta <= alpha:
            break
    return min_eval


def evaluate_board(board, game_over, winner, player):
    """
    Оценка позиции с точки зрения `player`.
    Терминальные позиции: +-1000 или 0 при ничьей.
    """
    if game_over:
        if winner == player:
            return WIN_SCORE
        if winner == c.TIE:
            return TIE_SCORE
        return LOSS_SCORE

    own_pits = sum(board[i] for i in get_pit_range(player))
    return _store_diff(board, player) * STORE_DIFF_WEIGHT + own_pits

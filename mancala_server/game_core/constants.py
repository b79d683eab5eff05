# mancala_server/game_core/constants.py

# === Настройка доски ===
PITS_PER_SIDE = 6
SEEDS_PER_PIT = 4
BOARD_SIZE = 14
TOTAL_SEEDS = PITS_PER_SIDE * SEEDS_PER_PIT * 2  # 48

# === Игроки ===
PLAYER_ONE = 1  # Создатель комнаты, всегда ходит первым
PLAYER_TWO = 2
TIE = 'tie'

# === Индексы доски ===

# Лунки игроков
PITS_PLAYER_ONE = range(0, 6)
PITS_PLAYER_TWO = range(7, 13)

# Амбары (stores)
STORE_PLAYER_ONE = 6
STORE_PLAYER_TWO = 13

# Ось зеркалирования: opposite(i) = 12 - i
OPPOSITE_AXIS = 12

# === Статусы партии ===
STATUS_PLAYING = 'playing'
STATUS_FINISHED = 'finished'

# === Сложность ИИ ===
DIFFICULTY_EASY = 'easy'
DIFFICULTY_MEDIUM = 'medium'
DIFFICULTY_HARD = 'hard'
DIFFICULTIES = (DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD)
DEFAULT_SEARCH_DEPTH = 4

"""
➡️ But : Répartir un pool d'événements sur les grilles des joueurs.

Fonction pure, sans I/O : distribute(event_ids, player_ids, grid_size) ->
{player_id: [Cell(row, column, event_id), ...]}

Algorithme :

1. Pool trop grand (> grid_size² × nb joueurs) : on le mélange, pour ne pas
   favoriser les premiers événements de la liste.
2. Couverture (round-robin) : chaque événement va au prochain joueur dont la
   grille n'est pas pleine et ne le contient pas encore. Tous les événements
   sont utilisés au moins une fois avant tout doublon.
3. Remplissage : les grilles encore incomplètes tirent au hasard dans le pool,
   en refusant les doublons sur une même grille. Le nombre de tirages est borné
   (max_draws par grille) : au-delà, DistributionError.

Les cases sont posées ligne par ligne : row = n // grid_size, column = n % grid_size.
"""

import random
from typing import Dict, Hashable, List, NamedTuple, Optional, Sequence, Set

from app.core.errors import DistributionError

DEFAULT_MAX_DRAWS = 10_000


class Cell(NamedTuple):
    row: int
    column: int
    event_id: Hashable


class _BoardFill:
    """Grille en cours de remplissage pour un joueur."""

    __slots__ = ("grid_size", "cells", "used")

    def __init__(self, grid_size: int):
        self.grid_size = grid_size
        self.cells: List[Cell] = []
        self.used: Set[Hashable] = set()

    @property
    def full(self) -> bool:
        return len(self.cells) >= self.grid_size * self.grid_size

    def accepts(self, event_id: Hashable) -> bool:
        return not self.full and event_id not in self.used

    def place(self, event_id: Hashable) -> None:
        filled = len(self.cells)
        self.cells.append(Cell(filled // self.grid_size, filled % self.grid_size, event_id))
        self.used.add(event_id)


def distribute(
    event_ids: Sequence[Hashable],
    player_ids: Sequence[Hashable],
    grid_size: int,
    *,
    rng: Optional[random.Random] = None,
    max_draws: Optional[int] = None,
) -> Dict[Hashable, List[Cell]]:
    if grid_size < 1:
        raise ValueError("grid_size must be >= 1")
    if not player_ids:
        raise ValueError("player_ids must not be empty")

    rng = rng or random.Random()
    max_draws = DEFAULT_MAX_DRAWS if max_draws is None else max_draws

    cells_per_board = grid_size * grid_size
    pool = list(event_ids)
    if len(set(pool)) < cells_per_board:
        # l'appelant aurait dû refuser la partie avant
        raise DistributionError(
            f"Pool has {len(set(pool))} distinct events, a {grid_size}x{grid_size} board needs {cells_per_board}"
        )

    if len(pool) > cells_per_board * len(player_ids):
        rng.shuffle(pool)

    boards = {player_id: _BoardFill(grid_size) for player_id in player_ids}
    order = list(boards)

    # 1) couverture round-robin
    cursor = 0
    for event_id in pool:
        if all(board.full for board in boards.values()):
            break
        for offset in range(len(order)):
            index = (cursor + offset) % len(order)
            board = boards[order[index]]
            if board.accepts(event_id):
                board.place(event_id)
                cursor = (index + 1) % len(order)
                break

    # 2) remplissage aléatoire borné
    for player_id in order:
        board = boards[player_id]
        draws = 0
        while not board.full:
            if draws >= max_draws:
                raise DistributionError(
                    f"Could not fill board for player {player_id} after {max_draws} draws"
                )
            draws += 1
            event_id = rng.choice(pool)
            if board.accepts(event_id):
                board.place(event_id)

    return {player_id: board.cells for player_id, board in boards.items()}

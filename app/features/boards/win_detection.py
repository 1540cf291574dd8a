"""
➡️ But : Détecter une ligne complète sur une grille.

has_win(grid) : True si une ligne, une colonne ou une des deux diagonales est
entièrement résolue (True). Recalcul complet à chaque appel, aucun état.
"""

from typing import Iterable, List, Optional, Sequence, Tuple


def build_grid(cells: Iterable[Tuple[int, int, bool]], grid_size: int) -> List[List[bool]]:
    """(row, column, résolu) -> matrice grid_size × grid_size (False par défaut)."""
    grid = [[False] * grid_size for _ in range(grid_size)]
    for row, column, closed in cells:
        grid[row][column] = bool(closed)
    return grid


def has_win(grid: Sequence[Sequence[bool]], grid_size: Optional[int] = None) -> bool:
    n = len(grid) if grid_size is None else grid_size
    if n == 0:
        return False
    if len(grid) != n or any(len(row) != n for row in grid):
        raise ValueError(f"grid must be {n}x{n}")

    # lignes
    for r in range(n):
        if all(grid[r][c] for c in range(n)):
            return True

    # colonnes
    for c in range(n):
        if all(grid[r][c] for r in range(n)):
            return True

    # diagonale principale
    if all(grid[i][i] for i in range(n)):
        return True

    # anti-diagonale
    return all(grid[i][n - 1 - i] for i in range(n))

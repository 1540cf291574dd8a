"""
➡️ But : Taxonomie des erreurs métier levées par les services.

Les services lèvent ces exceptions, les routers les traduisent en statut HTTP.
Le `code` (ex: "EVENT_NOT_FOUND") est stable et peut être affiché tel quel
par la couche de commandes.

- Validation  : entrée invalide (taille de grille, pas assez d'événements…)
- NotFound    : partie / événement / grille inconnus
- Conflict    : vote en double, événement déjà résolu, suppression d'une partie inconnue
- Storage     : panne ou timeout de la base (transaction annulée)
- Distribution: invariant interne violé (erreur de programmation)
"""

from typing import Optional


class BingoError(Exception):
    """Base de toutes les erreurs métier."""

    code: str = "BINGO_ERROR"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message or self.code
        super().__init__(self.message)


# -----------------------------
# Validation (400)
# -----------------------------
class ValidationError(BingoError, ValueError):
    code = "VALIDATION_ERROR"


class GridSizeError(ValidationError):
    code = "GRID_SIZE_OUT_OF_BOUNDS"


class InsufficientEventsError(ValidationError):
    """Pas assez d'événements pour remplir une grille."""

    code = "INSUFFICIENT_EVENTS"

    def __init__(self, *, required: int, provided: int):
        self.required = required
        self.provided = provided
        self.shortfall = required - provided
        super().__init__(
            f"A {required}-cell board needs at least {required} events, "
            f"got {provided} ({self.shortfall} missing)"
        )


# -----------------------------
# Not found (404)
# -----------------------------
class NotFoundError(BingoError, LookupError):
    code = "NOT_FOUND"


class NoActiveGameError(NotFoundError):
    code = "NO_ACTIVE_GAME"

    def __init__(self):
        super().__init__("No active game found. Specify a game_id or set an active game")


# -----------------------------
# Conflits (409)
# -----------------------------
class ConflictError(BingoError):
    code = "CONFLICT"


class DuplicateVoteError(ConflictError):
    code = "ALREADY_VOTED"


class EventAlreadyResolvedError(ConflictError):
    code = "EVENT_ALREADY_RESOLVED"


class InvalidTransitionError(ConflictError):
    code = "INVALID_STATUS_TRANSITION"


class UnknownGameError(ConflictError):
    """Suppression d'une partie qui n'existe pas (ou plus) : refus, rien n'est modifié."""

    code = "GAME_NOT_FOUND"



# -----------------------------
# Stockage (503 / 504)
# -----------------------------
class StorageError(BingoError):
    code = "STORAGE_FAILURE"


class OperationTimeoutError(StorageError):
    code = "OPERATION_TIMEOUT"


# -----------------------------
# Invariants internes (500)
# -----------------------------
class DistributionError(BingoError):
    code = "UNSATISFIABLE_DISTRIBUTION"

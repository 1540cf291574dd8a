SMALL_GROUP_MAX = 3
# 60 % des joueurs, arrondi au supérieur
SUPERMAJORITY_NUM = 3
SUPERMAJORITY_DEN = 5


def required_votes(player_count: int) -> int:
    """
    Nombre de votes nécessaires pour résoudre un événement.
    - jusqu'à 3 joueurs : unanimité
    - au-delà : ceil(0.6 × joueurs)
    """
    if player_count <= 0:
        raise ValueError("player_count must be positive")
    if player_count <= SMALL_GROUP_MAX:
        return player_count
    # ceil entier, sans flottant
    return -(-player_count * SUPERMAJORITY_NUM // SUPERMAJORITY_DEN)

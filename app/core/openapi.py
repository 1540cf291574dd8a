"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée des règles du jeu,

documenter les conventions (partie active par défaut, échéance, codes d'erreur).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Bingo multijoueur piloté par commandes : chaque joueur reçoit une grille "
            "d'événements, les joueurs votent pour les événements survenus.\n\n"
            "### Conventions\n"
            "- Sans `game_id`, les commandes visent la partie active.\n"
            "- Seuil de résolution : unanimité jusqu'à 3 joueurs, sinon 60 % (arrondi au supérieur).\n"
            "- Header optionnel `X-Command-Timeout` (secondes) : échéance de l'opération.\n"
            "- Erreurs : `detail = {code, message}` (400 validation, 404 introuvable, "
            "409 conflit, 503 stockage, 504 échéance).\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

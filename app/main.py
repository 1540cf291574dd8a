"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

les logs (loguru) + middleware de log des requêtes

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (ex : /api/v1/games).

Initialise la base SQLite au démarrage (@app.on_event("startup")).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn app.main:app --reload.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logger import logger, setup_logging
from app.core.logging_middleware import log_requests
from app.core.openapi import custom_openapi
from app.db.session import init_db

from app.api.v1.routers import games, events, votes, boards

import uvicorn

setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "games", "description": "Création, partie active, suppression"},
        {"name": "events", "description": "Événements d'une partie et leurs votes"},
        {"name": "votes", "description": "Signaler qu'un événement s'est produit"},
        {"name": "boards", "description": "Grilles des joueurs"},
    ],
)

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(games.router, prefix="/api/v1")
app.include_router(events.router, prefix="/api/v1")
app.include_router(votes.router, prefix="/api/v1")
app.include_router(boards.router, prefix="/api/v1")

# Génération du schéma OpenAPI custom (facultatif, mais propre)
app.openapi = lambda: custom_openapi(app)

@app.get("/health", tags=["health"])
def health_check():
    return {"status": "healthy", "service": settings.APP_NAME}

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV})")

@app.on_event("shutdown")
def on_shutdown():
    logger.info(f"{settings.APP_NAME} stopped")

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080

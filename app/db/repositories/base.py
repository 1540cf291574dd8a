from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (Game, Event, Board…)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, bulk_create, read, count, list.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 commit=False : le service orchestre la transaction (voir app.db.transaction).
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(self, offset: int = 0, limit: int = 100) -> Sequence[ModelT]:
        """Retourne une liste paginée des enregistrements, par id croissant."""
        statement = select(self.model).order_by(self.model.id.asc()).offset(offset).limit(limit)
        return self.session.exec(statement).all()

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def _persist(self, entities: List[ModelT], commit: bool) -> None:
        if commit:
            self.session.commit()
            for entity in entities:
                self.session.refresh(entity)
        else:
            # flush pour obtenir les IDs sans commit (utile pour FKs)
            self.session.flush()

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """
        Crée et persiste un nouvel enregistrement.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        entity = self.model(**fields)
        self.session.add(entity)
        self._persist([entity], commit)
        return entity

    def bulk_create(self, rows: Iterable[dict], *, commit: bool = True) -> List[ModelT]:
        """Crée plusieurs enregistrements en un seul flush."""
        entities = [self.model(**fields) for fields in rows]
        self.session.add_all(entities)
        self._persist(entities, commit)
        return entities

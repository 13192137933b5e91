"""Shelter Infra Persistence -- SQLAlchemy engine, table mapping, repository."""

from shelter.infra.persistence.animal_repository import SqlAlchemyAnimalRepository
from shelter.infra.persistence.database import (
    DatabaseManager,
    DatabaseSettings,
    get_database_manager,
)
from shelter.infra.persistence.lifespan import lifespan_contribution
from shelter.infra.persistence.models import AnimalRow, Base

__all__ = [
    "AnimalRow",
    "Base",
    "DatabaseManager",
    "DatabaseSettings",
    "SqlAlchemyAnimalRepository",
    "get_database_manager",
    "lifespan_contribution",
]

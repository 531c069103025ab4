from .base import BaseDatabase, BaseRepository
from .postgresql import Base, PostgreSQLDatabase, PostgreSQLSettings

__all__ = ["Base", "BaseDatabase", "BaseRepository", "PostgreSQLDatabase", "PostgreSQLSettings"]

from abc import ABC, abstractmethod
from typing import Any, ContextManager, Dict, List, Optional

from sqlalchemy.orm import Session


class BaseDatabase(ABC):
    @abstractmethod
    def startup(self) -> None:
        pass

    @abstractmethod
    def teardown(self) -> None:
        pass

    @abstractmethod
    def get_session(self) -> ContextManager[Session]:
        pass


class BaseRepository(ABC):
    """Key/value style repository; records are addressed by a natural key."""

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def create(self, key: str, data: Dict[str, Any]) -> Any:
        """Create a record under ``key``."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get a record by key, or None."""

    @abstractmethod
    def update(self, key: str, data: Dict[str, Any]) -> Optional[Any]:
        """Update the record under ``key``; None if there is none."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a record by key."""

    @abstractmethod
    def list(self, limit: int = 100, offset: int = 0) -> List[Any]:
        """List records with pagination."""

from typing import Any, Optional

from sqlalchemy.orm import Session


class BaseRepository:
    """Repository bound to one Session; transactions are owned by the caller."""
    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, pk: Any) -> Optional[Any]:
        return self.db.get(self.model, pk)

    def flush(self) -> None:
        self.db.flush()

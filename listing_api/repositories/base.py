"""
Generic async repository: keyed lookups and single-row writes. Each write is its own transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from listing_api.database import Base
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one mapped class.
    Writes commit on success; on failure they roll back, log and re-raise.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert one row.

        Args:
            obj_in: Column values for the new row

        Returns:
            The persisted instance, refreshed so server defaults are populated
        """
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Insert into {self.model.__tablename__} failed: {e}")
            raise

        await self.db.refresh(db_obj)
        logger.debug(f"{self.model_name} {db_obj.id} inserted")
        return db_obj

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Return the row with this primary key, or None."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        obj = result.scalar_one_or_none()
        logger.debug(f"{self.model_name} {id} {'found' if obj else 'missing'}")
        return obj

    async def update(self, id: int, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Overwrite the given columns of one row; ``None`` values are skipped.

        Returns:
            The refreshed instance, or None if no row has this id
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None

        changes = {k: v for k, v in obj_in.items() if v is not None}
        if not changes:
            return db_obj

        for field, value in changes.items():
            setattr(db_obj, field, value)

        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Update of {self.model_name} {id} failed: {e}")
            raise

        await self.db.refresh(db_obj)
        logger.debug(f"{self.model_name} {id} updated: {sorted(changes)}")
        return db_obj

    async def exists(self, id: int) -> bool:
        result = await self.db.execute(
            select(self.model.id).where(self.model.id == id).limit(1)
        )
        return result.scalar_one_or_none() is not None

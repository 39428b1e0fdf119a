"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from designhub.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	Models exposing an ``is_active`` column are soft-deleted.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	def _commit(self, db: Session, *objs: Any) -> None:
		"""Add, commit and refresh ``objs``; roll back on any failure."""
		try:
			for obj in objs:
				db.add(obj)
			db.commit()
			for obj in objs:
				db.refresh(obj)
		except Exception:
			logger.exception("Commit failed for %s", self.model.__name__)
			db.rollback()
			raise

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> Iterable[ModelType]:
		"""Get records with pagination."""
		stmt = select(self.model).order_by(self.model.id).offset(skip).limit(limit)
		return db.scalars(stmt).all()

	def count(self, db: Session) -> int:
		"""Count all records."""
		return db.scalar(select(func.count()).select_from(self.model)) or 0

	# ----- Create -----
	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], **extra: Any) -> ModelType:
		"""Create a new record from a Pydantic schema or dict plus extra column values."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		obj_in_data.update(extra)
		db_obj = self.model(**obj_in_data)  # type: ignore[arg-type]
		self._commit(db, db_obj)
		return db_obj

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		try:
			for field, value in update_data.items():
				if hasattr(db_obj, field):
					setattr(db_obj, field, value)
		except Exception:
			# Discard the fields already assigned before the failing one
			db.rollback()
			raise

		self._commit(db, db_obj)
		return db_obj

	# ----- Delete -----
	def delete(self, db: Session, *, id: Any) -> Optional[ModelType]:
		"""Delete a record.

		Soft-deletes when the model has an `is_active` field; otherwise hard delete.
		Returns the affected object (or None if not found).
		"""
		db_obj = self.get(db, id)
		if not db_obj:
			return None

		if hasattr(db_obj, "is_active"):
			db_obj.is_active = False
			self._commit(db, db_obj)
			return db_obj

		try:
			db.delete(db_obj)
			db.commit()
		except Exception:
			db.rollback()
			raise
		return db_obj

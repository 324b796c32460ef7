# File: eventhub/crud/base.py
from typing import Any, Generic, List, Optional, Type, TypeVar
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session
from eventhub.db.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return db.query(self.model).offset(skip).limit(limit).all()

    def create(self, db: Session, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def save_qr_artifact(self, db: Session, *, db_obj: ModelType, qr_code: str, qr_code_data: str) -> ModelType:
        """Write both artifact columns in one update."""
        db_obj.qr_code = qr_code
        db_obj.qr_code_data = qr_code_data
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def claim_qr_artifact(self, db: Session, *, db_obj: ModelType, qr_code: str, qr_code_data: str) -> bool:
        """Store the artifact only if the row carries none yet.

        A single conditional UPDATE, so of two concurrent first issuances only
        one is stored. Returns False when another writer got there first; the
        refreshed db_obj then holds the stored artifact.
        """
        claimed = db.query(self.model).filter(
            self.model.id == db_obj.id,
            or_(self.model.qr_code.is_(None), self.model.qr_code == "")
        ).update(
            {"qr_code": qr_code, "qr_code_data": qr_code_data},
            synchronize_session=False
        )
        db.commit()
        db.refresh(db_obj)
        return claimed == 1

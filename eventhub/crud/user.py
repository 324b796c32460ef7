# File: eventhub/crud/user.py
from typing import Optional
from sqlalchemy.orm import Session
from eventhub.crud.base import CRUDBase
from eventhub.models.user import User, Student
from eventhub.schemas.user import UserCreate, StudentCreate

class CRUDUser(CRUDBase[User, UserCreate]):

    def get_by_external_id(self, db: Session, *, external_id: str) -> Optional[User]:
        return db.query(User).filter(User.external_id == external_id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

class CRUDStudent(CRUDBase[Student, StudentCreate]):

    def get_by_user(self, db: Session, *, user_id: str) -> Optional[Student]:
        return db.query(Student).filter(Student.user_id == user_id).first()

user = CRUDUser(User)
student = CRUDStudent(Student)

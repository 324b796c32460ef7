from typing import Callable
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from eventhub import crud
from eventhub.core.security import decode_token
from eventhub.db.database import get_db
from eventhub.models.user import User, UserRole

security = HTTPBearer()

def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    external_id = payload.get("sub")
    if external_id is None:
        raise credentials_exception

    user = crud.user.get_by_external_id(db, external_id=external_id)
    if user is None or not user.is_active:
        raise credentials_exception

    return user

def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency that only lets users with one of the given roles through."""
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current_user
    return checker

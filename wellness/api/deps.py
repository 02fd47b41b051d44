from typing import Callable, Generator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from wellness import crud, models
from wellness.core.access import AccessGate
from wellness.core.errors import NotFound, UnsupportedMediaType
from wellness.db.session import SessionLocal
from wellness.schemas.auth import Principal


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


def get_current_principal(
    authorization: Optional[str] = Header(None),
    gate: AccessGate = Depends(get_access_gate),
) -> Principal:
    return gate.authenticate(authorization)


def require_roles(*roles: str) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold one of ``roles``."""

    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        return AccessGate.authorize(principal, roles)

    return _check


def get_current_user(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> models.User:
    user = crud.user.get(db, principal.id)
    if not user:
        raise NotFound("User not found")
    return user


def require_json(request: Request) -> None:
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        raise UnsupportedMediaType()

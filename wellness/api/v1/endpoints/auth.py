import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wellness import crud
from wellness.api import deps
from wellness.core.access import AccessGate
from wellness.core.config import settings
from wellness.core.errors import Conflict, Forbidden, InvalidInput, Unauthorized
from wellness.models.user import Role
from wellness.schemas.auth import AuthResponse, LoginRequest, Principal, RegisterRequest, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(gate: AccessGate, user) -> AuthResponse:
    return AuthResponse(token=gate.issue_token(user), user=UserPublic.model_validate(user))


def _create_user(db: Session, **fields):
    try:
        user = crud.user.create(db, **fields)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Email already registered")
    return user


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(deps.require_json)])
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(deps.get_db),
    gate: AccessGate = Depends(deps.get_access_gate),
) -> Any:
    """
    Log in, or sign up on first login.

    Unknown emails become client accounts when ``mode`` is ``client`` and
    nutritionist accounts when the email is on the allowlist.
    """
    existing = crud.user.get_by_email(db, email=payload.email)
    if existing:
        if existing.role == Role.NUTRITIONIST and not gate.may_act_as_nutritionist(existing.email):
            raise Forbidden("This email is not authorized for staff access.")
        if not crud.user.authenticate(db, email=payload.email, password=payload.password):
            raise Unauthorized("Invalid credentials")
        return _auth_response(gate, existing)

    default_name = (payload.name or "").strip() or payload.email.split("@")[0]

    if (payload.mode or "").lower() == Role.CLIENT:
        user = _create_user(
            db,
            name=default_name,
            email=payload.email,
            password=payload.password,
            role=Role.CLIENT,
            client_id=payload.client_id,
            company_id=payload.company_id,
        )
        logger.info(f"Created client account {user.id} on first login")
        response.status_code = status.HTTP_201_CREATED
        return _auth_response(gate, user)

    if gate.may_act_as_nutritionist(payload.email):
        user = _create_user(
            db,
            name=default_name,
            email=payload.email,
            password=payload.password,
            role=Role.NUTRITIONIST,
        )
        logger.info(f"Created nutritionist account {user.id} on first login")
        response.status_code = status.HTTP_201_CREATED
        return _auth_response(gate, user)

    raise Forbidden("This email is not authorized to access the dashboard.")


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.require_json)],
)
def register(
    payload: RegisterRequest,
    db: Session = Depends(deps.get_db),
    gate: AccessGate = Depends(deps.get_access_gate),
) -> Any:
    """
    Register a staff account.
    """
    if payload.role not in Role.STAFF:
        raise InvalidInput("role must be admin | nutritionist")
    if payload.role == Role.NUTRITIONIST and not gate.may_act_as_nutritionist(payload.email):
        raise Forbidden("Email is not permitted to register as staff.")
    if payload.role == Role.ADMIN and not settings.ALLOW_PUBLIC_ADMIN_REGISTRATION:
        raise Forbidden("Admin registration is disabled.")
    if crud.user.get_by_email(db, email=payload.email):
        raise Conflict("Email already registered")

    user = _create_user(
        db,
        name=payload.name.strip(),
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    logger.info(f"Registered {user.role} account {user.id}")
    return _auth_response(gate, user)


@router.get("/me", response_model=Principal)
def read_me(principal: Principal = Depends(deps.get_current_principal)) -> Any:
    return principal

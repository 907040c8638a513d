from fastapi import APIRouter, Body, Depends, Header, Response

from files_manager.core.errors import Unauthorized
from files_manager.routers.deps import get_session_service
from files_manager.services.session import SessionService, parse_basic_auth

router = APIRouter()


@router.post("/users", status_code=201)
def create_user(
    body: dict | None = Body(None),
    sessions: SessionService = Depends(get_session_service),
):
    body = body or {}
    return sessions.register(body.get("email"), body.get("password"))


@router.get("/users/me")
def get_me(
    x_token: str | None = Header(None),
    sessions: SessionService = Depends(get_session_service),
):
    user = sessions.authenticate(x_token)
    return {"id": user["id"], "email": user["email"]}


# sign in with Basic auth → new session token
@router.get("/connect")
def connect(
    authorization: str | None = Header(None),
    sessions: SessionService = Depends(get_session_service),
):
    credentials = parse_basic_auth(authorization)
    if credentials is None:
        raise Unauthorized()
    token = sessions.sign_in(*credentials)
    return {"token": token}


@router.get("/disconnect", status_code=204)
def disconnect(
    x_token: str | None = Header(None),
    sessions: SessionService = Depends(get_session_service),
):
    sessions.sign_out(x_token)
    return Response(status_code=204)

from fastapi import APIRouter, HTTPException

from tokbox_server.exceptions import InvalidArgumentError, OpenTokError, RequestError

from .controller import SessionController

router = APIRouter()
controller = SessionController()


@router.post("/join")
def join_session(role: str = "publisher", data: str | None = None):
    try:
        return controller.create_session_token(role=role, data=data)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RequestError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except OpenTokError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

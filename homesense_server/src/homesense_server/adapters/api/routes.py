# homesense_server/adapters/api/routes.py

import logging
import secrets
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse
from homesense_core.application import get_room_state, record_room_update
from homesense_core.config.settings import Settings
from homesense_core.domain.ports import RoomStateStore
from pydantic import ValidationError

from homesense_server.adapters.api.schemas import RoomStateOut, RoomUpdateIn, render_csv

log = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"
LIVENESS_BODY = "HomeSense server OK"

router = APIRouter()


def get_store(request: Request) -> RoomStateStore:
    return request.app.state.store


def get_config(request: Request) -> Settings:
    return request.app.state.settings


def is_authorized(presented: Optional[str], expected: str) -> bool:
    # an empty configured secret matches nobody
    if not expected or presented is None:
        return False
    return secrets.compare_digest(presented.encode(), expected.encode())


@router.get("/", response_class=PlainTextResponse)
def liveness() -> str:
    return LIVENESS_BODY


@router.post(
    "/api/room/{room_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"description": "invalid range"}, 401: {"description": "bad API key"}},
)
async def update_room(
    room_id: str,
    request: Request,
    store: RoomStateStore = Depends(get_store),
    config: Settings = Depends(get_config),
) -> Response:
    if not is_authorized(request.headers.get(API_KEY_HEADER), config.HUB_API_KEY):
        caller = request.client.host if request.client else "unknown"
        log.warning("Invalid POST from %s for room %s", caller, room_id)
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        update = RoomUpdateIn.model_validate_json(await request.body())
    except ValidationError as exc:
        log.info("Rejected update for room %s: %s error(s)", room_id, exc.error_count())
        return PlainTextResponse("invalid range", status_code=status.HTTP_400_BAD_REQUEST)

    record_room_update(room_id, update.to_domain(), store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/api/room/{room_id}",
    response_model=RoomStateOut,
    responses={200: {"content": {"text/plain": {}}}, 404: {"description": "no state yet"}},
)
def read_room(
    room_id: str,
    store: RoomStateStore = Depends(get_store),
    config: Settings = Depends(get_config),
) -> Union[RoomStateOut, Response]:
    state = get_room_state(room_id, store)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"no state recorded for room {room_id}",
        )

    if config.ROOM_RESPONSE_FORMAT == "csv":
        return PlainTextResponse(render_csv(state))
    return RoomStateOut.from_domain(state)

"""REST service to play FreeCell from a browser UI."""

from __future__ import annotations

import uuid
from dataclasses import asdict
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from freecell.game import IllegalMove, MissingSelection
from freecell.receptacles import CardNotInReceptacle
from freecell.rules_schema import DEFAULT_RULES, RuleSet
from freecell.service import GameService, TableView


class StartRequest(BaseModel):
    seed: Optional[int] = None
    rules: Optional[RuleSet] = None


class DealRequest(BaseModel):
    seed: Optional[int] = None


class CardPayload(BaseModel):
    rank: int
    suit: str


class SelectRequest(BaseModel):
    kind: str
    index: int
    card: Optional[CardPayload] = None


class InsertRequest(BaseModel):
    kind: str
    index: int


sessions: Dict[str, GameService] = {}


app = FastAPI(title="FreeCell Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_state(view: TableView) -> Dict[str, object]:
    return asdict(view)


def ensure_session(session_id: str) -> GameService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    service = GameService(rules=request.rules or DEFAULT_RULES)
    view = service.start_new_game(seed=request.seed)
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    return {
        "session_id": session_id,
        "state": serialize_state(view),
    }


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.get_table_view())}


@app.post("/session/{session_id}/select")
def select_cards(session_id: str, request: SelectRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    card = request.card.model_dump() if request.card is not None else None
    try:
        view = service.select(request.kind, request.index, card)
    except (ValueError, CardNotInReceptacle) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/insert")
def insert_cards(session_id: str, request: InsertRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        view = service.insert(request.kind, request.index)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (IllegalMove, MissingSelection) as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/cancel")
def cancel_selection(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.cancel())}


@app.post("/session/{session_id}/auto")
def auto_move(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.auto_move())}


@app.post("/session/{session_id}/restart")
def restart_deal(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.restart())}


@app.post("/session/{session_id}/deal")
def deal_again(session_id: str, request: DealRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.start_new_game(seed=request.seed))}


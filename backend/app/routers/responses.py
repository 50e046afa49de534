import json
import logging
import sqlite3

from fastapi import APIRouter, Body, Depends, HTTPException

from ..db.database import get_db
from ..engines.survey.errors import CorruptStoredResponseError
from ..engines.survey.schemas import SubmitResponseResult, decode_answer_set_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/responses", tags=["responses"])


def db_conn():
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()


@router.post("", response_model=SubmitResponseResult)
def create_response(
    payload: dict[str, str] = Body(...),
    db: sqlite3.Connection = Depends(db_conn),
):
    try:
        cursor = db.execute(
            "INSERT INTO responses (payload) VALUES (?)",
            (json.dumps(payload, ensure_ascii=False),),
        )
        db.commit()
    except sqlite3.Error as err:
        logger.exception("Failed to store survey response")
        raise HTTPException(status_code=500, detail=str(err)) from err
    logger.info("Stored survey response id=%s", cursor.lastrowid)
    return SubmitResponseResult(id=cursor.lastrowid)


@router.get("/{response_id}", response_model=dict[str, str])
def get_response(response_id: int, db: sqlite3.Connection = Depends(db_conn)):
    try:
        row = db.execute("SELECT payload FROM responses WHERE id = ?", (response_id,)).fetchone()
    except sqlite3.Error as err:
        logger.exception("Failed to read survey response id=%s", response_id)
        raise HTTPException(status_code=500, detail=str(err)) from err
    if row is None or not row["payload"]:
        raise HTTPException(status_code=404, detail="Not found")

    try:
        return decode_answer_set_json(row["payload"])
    except CorruptStoredResponseError as err:
        logger.warning("Stored payload for response id=%s is corrupted", response_id)
        raise HTTPException(status_code=500, detail="Corrupted stored payload") from err

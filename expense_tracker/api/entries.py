# expense_tracker/api/entries.py

import math
import time
from typing import Iterable, Optional
from uuid import uuid4

import structlog
from fastapi import APIRouter, Body, Depends, Request

from expense_tracker.amounts import as_text, finite_number, normalize_amount
from expense_tracker.db.store import DuplicateEntryError, EntryStore, StorageError
from expense_tracker.errors import ConflictError, InputError, NotFoundError, ServerError
from expense_tracker.models.entries import (
    Entry,
    EntryCreate,
    EntryCreatedOut,
    EntryListOut,
    ErrorOut,
    MessageOut,
    TotalOut,
)

router = APIRouter(
    prefix="/api/entries",
    tags=["entries"],
    responses={500: {"model": ErrorOut}},
)

logger = structlog.get_logger(__name__)


def get_store(request: Request) -> EntryStore:
    return request.app.state.store


def compute_total(entries: Iterable[Entry]) -> float:
    total = 0.0
    for entry in entries:
        amount = finite_number(entry.amount)
        total += amount if amount is not None else 0.0
    return total


def resolve_amount(payload: EntryCreate) -> float:
    """
    Prefer a finite numeric amount; otherwise normalize the text we were given.
    """
    amount = finite_number(payload.amount)
    if amount is not None:
        return amount

    source = payload.raw_value if payload.raw_value is not None else payload.amount
    return normalize_amount(source)


def new_entry_id() -> str:
    return f"entry_{uuid4().hex}"


def build_entry(payload: EntryCreate, amount: float) -> Entry:
    raw_source = next(
        (v for v in (payload.raw_value, payload.amount) if v is not None), ""
    )
    label = payload.label if payload.label is not None else ""

    return Entry(
        id=as_text(payload.id) if payload.id else new_entry_id(),
        amount=amount,
        raw_value=as_text(raw_source).strip(),
        label=as_text(label).strip(),
        created_at=int(time.time() * 1000),
    )


@router.get("", response_model=EntryListOut)
@router.get("/", response_model=EntryListOut, include_in_schema=False)
async def list_entries(store: EntryStore = Depends(get_store)) -> EntryListOut:
    """
    Return every entry, newest first, with the running total.
    """
    try:
        entries = await store.read_all()
    except StorageError as e:
        logger.error("entries_read_failed", error=str(e))
        raise ServerError("Failed to read entries.") from e

    return EntryListOut(entries=entries, total=compute_total(entries))


@router.post(
    "",
    response_model=EntryCreatedOut,
    status_code=201,
    responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}},
)
@router.post(
    "/", response_model=EntryCreatedOut, status_code=201, include_in_schema=False
)
async def create_entry(
    payload: Optional[EntryCreate] = Body(default=None),
    store: EntryStore = Depends(get_store),
) -> EntryCreatedOut:
    """
    Record a new expense. Accepts a numeric amount or loosely formatted text
    such as "12,50 EUR".
    """
    payload = payload or EntryCreate()

    amount = resolve_amount(payload)
    if not math.isfinite(amount):
        raise InputError("Invalid amount value.")

    entry = build_entry(payload, amount)

    try:
        entries = await store.append(entry)
    except DuplicateEntryError as e:
        raise ConflictError("Entry id already exists.") from e
    except StorageError as e:
        logger.error("entry_save_failed", error=str(e))
        raise ServerError("Failed to save entry.") from e

    logger.info("entry_created", entry_id=entry.id, amount=entry.amount)
    return EntryCreatedOut(entry=entry, total=compute_total(entries))


@router.post("/reset", response_model=MessageOut)
async def reset_entries(store: EntryStore = Depends(get_store)) -> MessageOut:
    """
    Remove every entry.
    """
    try:
        await store.clear()
    except StorageError as e:
        logger.error("entries_clear_failed", error=str(e))
        raise ServerError("Failed to clear entries.") from e

    logger.info("entries_cleared")
    return MessageOut(message="All entries cleared.")


@router.delete(
    "/{entry_id}",
    response_model=TotalOut,
    responses={404: {"model": ErrorOut}},
)
async def delete_entry(
    entry_id: str, store: EntryStore = Depends(get_store)
) -> TotalOut:
    """
    Delete a single entry by id and return the new total.
    """
    try:
        remaining = await store.remove(entry_id)
    except StorageError as e:
        logger.error("entry_remove_failed", entry_id=entry_id, error=str(e))
        raise ServerError("Failed to remove entry.") from e

    if remaining is None:
        raise NotFoundError("Entry not found.")

    logger.info("entry_deleted", entry_id=entry_id)
    return TotalOut(total=compute_total(remaining))

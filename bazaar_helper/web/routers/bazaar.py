"""Chat-bot enchantment lookup endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from bazaar_helper.bootstrap import get_container

router = APIRouter()


@router.get("/bazaar", response_class=PlainTextResponse)
async def bazaar(q: str | None = None) -> str:
    return await get_container().enchantments.answer(q)

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from insights_hub.core.exceptions import ValidationError
from insights_hub.schemas.article import (
    ChatState,
    NotifyState,
    ShareLinkResponse,
    SummaryState,
    initial_chat_state,
)
from insights_hub.services.actions import (
    chat_action,
    get_summary_action,
    send_feedback_action,
    share_article_action,
)
from insights_hub.services.notifier import build_share_mailto_link
from insights_hub.services.validators import validate_recipient_email

router = APIRouter()


@router.post("/summarize", response_model=SummaryState)
async def summarize(request: Request):
    form = await request.form()
    return await get_summary_action(form)


@router.get("/chat/initial", response_model=ChatState)
async def chat_initial():
    return initial_chat_state()


@router.post("/chat", response_model=ChatState)
async def chat(request: Request):
    form = await request.form()
    return await chat_action(form)


@router.post("/feedback", response_model=NotifyState)
async def feedback(request: Request):
    form = await request.form()
    return await send_feedback_action(form)


@router.post("/share", response_model=NotifyState)
async def share(request: Request):
    form = await request.form()
    return await share_article_action(form)


@router.get("/share/link", response_model=ShareLinkResponse)
async def share_link(
    recipient_email: str = Query(..., alias="recipientEmail"),
    article_title: str = Query(..., alias="articleTitle"),
    article_content: str = Query("", alias="articleContent"),
    article_url: Optional[str] = Query(None, alias="articleUrl"),
):
    try:
        recipient = validate_recipient_email(recipient_email)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    link = build_share_mailto_link(recipient, article_title, article_content, article_url)
    return ShareLinkResponse(link=link)

from pydantic import BaseModel, Field
from typing import List, Literal, Optional

INITIAL_GREETING = "Hello! How can I help you with this article?"


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    content: str


class SummaryResult(BaseModel):
    summary: str = Field(description="A concise summary of the article content.")


class ChatResult(BaseModel):
    answer: str = Field(
        description=(
            "The answer to the user's question based on the article content "
            "and conversation history."
        )
    )


class SummarizeInput(BaseModel):
    article_content: str


class ChatInput(BaseModel):
    article_content: str
    history: List[ChatTurn] = []
    user_question: str


class FeedbackInput(BaseModel):
    feedback: str


class ShareInput(BaseModel):
    recipient_email: str
    article_title: str
    article_content: str
    article_url: Optional[str] = None


# Form action states returned to the UI

class SummaryState(BaseModel):
    summary: Optional[str] = None
    error: Optional[str] = None


class ChatState(BaseModel):
    messages: List[ChatTurn]
    error: Optional[str] = None


class NotifyState(BaseModel):
    success: bool = False
    error: Optional[str] = None


class ShareLinkResponse(BaseModel):
    link: str


def initial_chat_state() -> ChatState:
    return ChatState(messages=[ChatTurn(role="model", content=INITIAL_GREETING)])

import logging

from langchain_core.prompts import ChatPromptTemplate

from insights_hub.core.config import settings
from insights_hub.core.exceptions import ChatResponseError, SchemaError
from insights_hub.schemas.article import ChatResult, ChatTurn
from insights_hub.services import llm
from insights_hub.services.history_mapper import format_chat_history

logger = logging.getLogger(__name__)

GROUNDING_INSTRUCTIONS = (
    'You are a helpful assistant for the "AI Insights Hub" blog. '
    "Your role is to answer user questions based *only* on the provided article content. "
    "Do not use any external knowledge. If the answer is not in the article, "
    "say that you cannot find the answer in the provided text."
)

CONTACT_AUTHOR_INSTRUCTIONS = (
    "If the user says they want to contact or write to the author, do not ask for "
    "their name, email or message. Tell them to use the Share button on the page "
    "to send the article by email instead."
)


def build_chat_prompt(contact_author_nudge: bool | None = None) -> ChatPromptTemplate:
    if contact_author_nudge is None:
        contact_author_nudge = settings.CHAT_CONTACT_AUTHOR_NUDGE

    system_content = GROUNDING_INSTRUCTIONS
    if contact_author_nudge:
        system_content += "\n" + CONTACT_AUTHOR_INSTRUCTIONS
    system_content += "\n\nHere is the article content:\n---\n{article_content}\n---"

    return ChatPromptTemplate.from_messages([
        ("system", system_content),
        ("human",
         "Here is the conversation history:\n---\n{history}\n---\n\n"
         "Here is the new user question:\n{question}\n\n"
         "Based on the article and the conversation history, "
         "provide a concise answer to the user's question."),
    ])


def get_chat_chain():
    return build_chat_prompt() | llm.get_structured_model(ChatResult)


async def respond(
    article_content: str, history: list[ChatTurn], question: str
) -> ChatResult:
    """Answer one question about the article.

    No state is kept between calls: ``history`` is the transcript the client
    replays, rendered into the prompt oldest first with ``question`` last.
    """
    try:
        chain = get_chat_chain()
        result = await chain.ainvoke({
            "article_content": article_content,
            "history": format_chat_history(history),
            "question": question,
        })
    except Exception as exc:
        logger.exception("[ChatError] turns=%s", len(history))
        raise ChatResponseError("chat response failed") from exc

    if not isinstance(result, ChatResult):
        logger.error("[ChatSchemaError] turns=%s got=%s", len(history), type(result).__name__)
        raise SchemaError("chat response did not match ChatResult")

    logger.info("[Chat] turns=%s answer_chars=%s", len(history), len(result.answer))
    return result

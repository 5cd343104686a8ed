import logging

from langchain_core.prompts import ChatPromptTemplate

from insights_hub.core.exceptions import SchemaError, SummaryGenerationError
from insights_hub.schemas.article import SummaryResult
from insights_hub.services import llm

logger = logging.getLogger(__name__)


def build_summary_prompt() -> ChatPromptTemplate:
    # The whole article goes out in a single request, no chunking.
    return ChatPromptTemplate.from_template(
        "Summarize the following article content in a concise manner:\n\n{article_content}"
    )


def get_summary_chain():
    return build_summary_prompt() | llm.get_structured_model(SummaryResult)


def _check_result(result, article_content: str) -> SummaryResult:
    if not isinstance(result, SummaryResult):
        logger.error("[SummarySchemaError] chars=%s got=%s", len(article_content), type(result).__name__)
        raise SchemaError("summary response did not match SummaryResult")
    logger.info("[Summary] chars=%s summary_chars=%s", len(article_content), len(result.summary))
    return result


async def summarize_async(article_content: str) -> SummaryResult:
    try:
        chain = get_summary_chain()
        result = await chain.ainvoke({"article_content": article_content})
    except Exception as exc:
        logger.exception("[SummaryError] chars=%s", len(article_content))
        raise SummaryGenerationError("summary generation failed") from exc
    return _check_result(result, article_content)

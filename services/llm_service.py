import logging
from functools import lru_cache
from typing import Any, Dict, List, Type, TypeVar

from langchain_anthropic import ChatAnthropic
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from config import get_settings
from models.errors import ModelInvocationError, SchemaViolation

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@lru_cache
def get_anthropic_llm(model: str = None) -> ChatAnthropic:
    """Get an Anthropic LLM instance."""
    # One attempt per stage; the caller bounds it with the model timeout
    return ChatAnthropic(
        model=model or get_settings().anthropic_model, temperature=0, max_retries=0
    )


def document_block(url: str) -> Dict:
    """Content block pointing the model at a PDF it should fetch by URL."""
    return {"type": "document", "source": {"type": "url", "url": url}}


def validate_structured_output(result: Any, schema: Type[T]) -> T:
    """
    Turn the raw result of a structured model call into a typed record.

    Args:
        result: Output of a runnable built with ``with_structured_output(..., include_raw=True)``
        schema: The pydantic model the response must conform to

    Returns:
        An instance of ``schema``

    Raises:
        SchemaViolation: If the response does not conform to the schema
    """
    if isinstance(result, schema):
        return result
    if not isinstance(result, dict):
        raise SchemaViolation(f"Unexpected structured output of type {type(result).__name__}")

    parsed = result.get("parsed")
    if isinstance(parsed, schema):
        return parsed

    candidate = parsed
    if candidate is None:
        tool_calls = getattr(result.get("raw"), "tool_calls", None) or []
        if not tool_calls:
            raise SchemaViolation(f"Model returned no structured {schema.__name__}")
        candidate = tool_calls[0].get("args")

    try:
        return schema.model_validate(candidate)
    except PydanticValidationError as e:
        raise SchemaViolation(
            f"Model output does not match the {schema.__name__} schema: {e.error_count()} error(s)"
        ) from e


async def invoke_structured(llm: Any, messages: List[Any], schema: Type[T]) -> T:
    """Invoke ``llm`` constrained to ``schema`` and return the validated record."""
    structured_llm = llm.with_structured_output(schema, include_raw=True)
    try:
        result = await structured_llm.ainvoke(messages)
    except Exception as e:
        logger.error(f"Model call for {schema.__name__} failed: {str(e)}")
        raise ModelInvocationError(f"Model call failed: {str(e)}") from e
    return validate_structured_output(result, schema)

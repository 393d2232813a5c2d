"""
Helper functions for LLM API calls.
"""
import requests
import json
import logging
from typing import List, Optional
from app.core.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def calculate_openai_cost(prompt_tokens: int, output_tokens: int, model_name: str = "gpt-4o-mini") -> float:
    """
    Calculate cost for a chat completions call based on token usage.

    Pricing per 1M tokens:
    - gpt-4o-mini: $0.15 input, $0.60 output
    - gpt-4o: $2.50 input, $10.00 output

    Args:
        prompt_tokens: Number of input tokens
        output_tokens: Number of output tokens
        model_name: Name of the model used

    Returns:
        Cost in USD
    """
    if "mini" in model_name.lower():
        input_price_per_million = 0.15
        output_price_per_million = 0.60
    elif "gpt-4o" in model_name.lower():
        input_price_per_million = 2.50
        output_price_per_million = 10.00
    else:
        # Default to mini pricing
        input_price_per_million = 0.15
        output_price_per_million = 0.60

    input_cost = (prompt_tokens / 1_000_000) * input_price_per_million
    output_cost = (output_tokens / 1_000_000) * output_price_per_million

    return input_cost + output_cost


def call_chat_completions(
    messages: List[dict],
    system_prompt: Optional[str] = None,
    tools: Optional[List[dict]] = None,
) -> tuple[dict, dict]:
    """
    Call an OpenAI-compatible chat completions API.

    Args:
        messages: Conversation so far, as {"role", "content"} dicts
        system_prompt: Optional system message prepended to the conversation
        tools: Optional function-tool definitions the model may call

    Returns:
        Tuple of (assistant message dict with 'content' and optional 'tool_calls',
                  token usage dict with keys 'prompt_tokens', 'output_tokens',
                  'total_tokens', 'cost_usd', 'model_name')

    Raises:
        UpstreamError: If the API key is missing, the call fails or the response is invalid
    """
    api_key = settings.openai_api_key
    if not api_key:
        raise UpstreamError("OpenAI API key not configured")

    model_name = settings.openai_model
    url = f"{settings.openai_base_url.rstrip('/')}/chat/completions"

    payload = {
        "model": model_name,
        "messages": ([{"role": "system", "content": system_prompt}] if system_prompt else []) + messages,
        "temperature": 0.7,
        "max_tokens": 2000,
    }

    if tools:
        payload["tools"] = tools
        payload["tool_choice"] = "auto"

    try:
        response = requests.post(
            url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=60
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        error_msg = f"Chat completions request failed: {str(e)}"
        if getattr(e, 'response', None) is not None:
            error_msg += f" - Status: {e.response.status_code}"
        logger.error(error_msg)
        raise UpstreamError(error_msg) from e
    except json.JSONDecodeError as e:
        logger.error(f"Chat completions returned invalid JSON: {e}")
        raise UpstreamError("LLM returned invalid JSON") from e

    # Extract token usage
    usage = data.get('usage', {})
    prompt_tokens = usage.get('prompt_tokens', 0)
    output_tokens = usage.get('completion_tokens', 0)
    total_tokens = usage.get('total_tokens', prompt_tokens + output_tokens)

    token_usage = {
        'prompt_tokens': prompt_tokens,
        'output_tokens': output_tokens,
        'total_tokens': total_tokens,
        'cost_usd': calculate_openai_cost(prompt_tokens, output_tokens, model_name),
        'model_name': model_name
    }

    choices = data.get('choices') or []
    if not choices or 'message' not in choices[0]:
        raise UpstreamError("LLM response missing choices")

    return choices[0]['message'], token_usage


def parse_tool_arguments(tool_call: dict) -> dict:
    """Decode the JSON arguments of a function tool call."""
    arguments = tool_call.get('function', {}).get('arguments') or "{}"
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse tool arguments: {arguments[:500]}")
        raise UpstreamError(f"LLM returned invalid tool arguments: {str(e)}") from e
    if not isinstance(parsed, dict):
        raise UpstreamError("LLM tool arguments must be a JSON object")
    return parsed

"""Text formatting helpers shared by prompts, cache keys and templates."""
from typing import Union


def format_number(value: Union[int, float]) -> str:
    """Render a number the way a JSON producer would: 450.0 -> '450', 12.5 -> '12.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["format_number"]

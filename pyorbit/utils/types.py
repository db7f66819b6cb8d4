from typing import Any, Mapping

# Type aliases for better clarity
Variables = dict[str, Any]
ResponseBody = Mapping[str, Any]
Identifier = str | int

# Constants
DEFAULT_CURSOR_VARIABLE = "cursor"


def merge_variables(
    base: Mapping[str, Any] | None = None,
    override: Mapping[str, Any] | None = None,
    **kwargs: Any
) -> Variables:
    """Merge multiple variable mappings with proper precedence.

    Args:
        base: Base variables
        override: Override variables (takes precedence over base)
        **kwargs: Additional variables (highest precedence)

    Returns:
        Merged variables dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}

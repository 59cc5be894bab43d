"""Command template substitution.

Templates are plain strings with ``?`` markers. Substitution is textual and
left to right; values are never escaped here.
"""

import shlex

PLACEHOLDER = "?"


def _substitute(text: str, values: list[str], placeholder: str) -> tuple[str, int]:
    """Fill markers in ``text`` from ``values``.

    Returns:
        The filled text and the number of values consumed
    """
    parts = text.split(placeholder)
    result = parts[0]
    consumed = 0
    for part in parts[1:]:
        value = values[consumed] if consumed < len(values) else ""
        consumed = min(consumed + 1, len(values))
        # Empty or missing values leave the marker in place
        result += (value or placeholder) + part
    return result, consumed


def fill_placeholders(
    template: str,
    values: list[str] | tuple[str, ...] | None = None,
    placeholder: str = PLACEHOLDER,
) -> str:
    """Replace each placeholder marker with the next unused value.

    Markers left over once values run out stay verbatim in the output;
    surplus values are ignored.

    Args:
        template: Template containing zero or more markers
        values: Ordered substitution values
        placeholder: Marker character

    Returns:
        The substituted string

    Example:
        >>> fill_placeholders("branch -? ?", ["d", "topic"])
        'branch -d topic'
        >>> fill_placeholders("clone ? ?", ["src"])
        'clone src ?'
    """
    filled, _ = _substitute(template, list(values or []), placeholder)
    return filled


def fill_arguments(
    template: str,
    values: list[str] | tuple[str, ...] | None = None,
    placeholder: str = PLACEHOLDER,
) -> list[str]:
    """Build an argument vector from a template.

    The template is tokenized with shell quoting rules first and markers are
    filled token by token, so a value containing spaces or quotes stays one
    argument and quotes in the template itself are not passed to git.

    Args:
        template: Template containing zero or more markers
        values: Ordered substitution values
        placeholder: Marker character

    Returns:
        List of arguments for the git executable

    Raises:
        ValueError: If the template has unbalanced quotes
    """
    remaining = list(values or [])
    args: list[str] = []
    for token in shlex.split(template):
        filled, consumed = _substitute(token, remaining, placeholder)
        remaining = remaining[consumed:]
        args.append(filled)
    return args


def escape_quotes(text: str) -> str:
    """Prefix every single quote with a backslash.

    Args:
        text: Raw text, e.g. a commit message

    Returns:
        Text safe to embed between single quotes in a command template
    """
    return text.replace("'", "\\'")

"""Path and query parameter handling.

Built-in converters for route path segments like ``{id:int}``, plus the
query-string split applied to every navigated path.
"""

from urllib.parse import parse_qsl, urlsplit

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def split_path(requested: str) -> tuple[str, dict[str, str]]:
    """Split a navigated path into its route path and query parameters.

    Repeated query keys keep the last value. The fragment is dropped::

        split_path("/d/42?near=7#top") -> ("/d/42", {"near": "7"})
    """
    parts = urlsplit(requested)
    return parts.path or "/", dict(parse_qsl(parts.query, keep_blank_values=True))

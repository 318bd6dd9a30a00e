from typing import Any, Iterable, List, Mapping

_LOCATION_PREFIXES = {"body", "query", "path", "header", "form"}


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """One ``path.to.field: message`` line per pydantic error."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        path = ".".join(loc) or "__root__"
        messages.append(f"{path}: {error.get('msg', 'invalid')}")
    return messages

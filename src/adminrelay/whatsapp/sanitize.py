"""Normalize template text parameters.

The Cloud API rejects template parameters containing newlines, tabs or more
than four consecutive spaces. Invisible characters are stripped too so the
admin sees what the sender actually typed.
"""

import re

from .models import TemplateComponent, TemplateParameter

_INVISIBLE_CHARS = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_LINE_BREAKS = re.compile(r"[\t\r\n]+")
_LONG_SPACE_RUN = re.compile(r" {5,}")


def sanitize_text(value: str) -> str:
    """Return `value` safe for use as a template text parameter."""
    result = _INVISIBLE_CHARS.sub("", value)
    result = _LINE_BREAKS.sub(" ", result)
    return _LONG_SPACE_RUN.sub("    ", result)


def _sanitize_parameter(param: TemplateParameter) -> TemplateParameter:
    if param.type != "text":
        return param
    return param.model_copy(update={"text": sanitize_text(param.text or "")})


def sanitize_components(components: list[TemplateComponent]) -> list[TemplateComponent]:
    """Copy of `components` with every text parameter sanitized."""
    return [
        component.model_copy(
            update={"parameters": [_sanitize_parameter(p) for p in component.parameters]}
        )
        for component in components
    ]

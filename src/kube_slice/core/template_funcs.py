"""Functions available inside file name templates.

Every function takes the piped value first, so ``{{ metadata.name | replace("-", "_") }}``
calls ``replace(name, "-", "_")``. Values coming out of a manifest can be any
YAML scalar, a mapping, a list or missing altogether; ``to_string`` decides
how each of those reads as text.
"""

from __future__ import annotations

import hashlib
import os
import re
from typing import Any, Callable

import yaml
from jinja2 import Undefined

DEFAULT_REQUIRED_MESSAGE = "argument is marked as required, but it renders to empty"

_NOT_ALPHANUM = re.compile(r"[^a-zA-Z0-9]+")
_NOT_ALPHANUM_DASH = re.compile(r"[^a-zA-Z0-9-]+")
_WORD = re.compile(r"\w+(?:['.]\w+)*")


class TemplateFunctionError(Exception):
    """Raised by a template function; surfaces as a RenderError."""


def to_string(value: Any) -> str:
    if value is None or isinstance(value, Undefined):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def lower(value: Any) -> str:
    return to_string(value).lower()


def upper(value: Any) -> str:
    return to_string(value).upper()


def title(value: Any) -> str:
    """Capitalize each word; apostrophes and dots inside a word do not split it."""
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), to_string(value))


def trim(value: Any) -> str:
    return to_string(value).strip()


def trim_prefix(value: Any, prefix: Any) -> str:
    s, prefix = to_string(value), to_string(prefix)
    if prefix and s.startswith(prefix):
        return s[len(prefix):]
    return s


def trim_suffix(value: Any, suffix: Any) -> str:
    s, suffix = to_string(value), to_string(suffix)
    if suffix and s.endswith(suffix):
        return s[:-len(suffix)]
    return s


def replace(value: Any, old: Any, new: Any) -> str:
    return to_string(value).replace(to_string(old), to_string(new))


def default(value: Any, fallback: Any = "") -> Any:
    s = to_string(value)
    if s:
        return s
    return fallback


def required(value: Any, message: str = DEFAULT_REQUIRED_MESSAGE) -> Any:
    if to_string(value) == "":
        raise TemplateFunctionError(message)
    return value


def alphanumify(value: Any) -> str:
    return _NOT_ALPHANUM.sub("", to_string(value))


def alphanumdash(value: Any) -> str:
    s = to_string(value).replace("_", "-").replace(".", "-")
    return _NOT_ALPHANUM_DASH.sub("", s)


def dottodash(value: Any) -> str:
    return to_string(value).replace(".", "-")


def dottounder(value: Any) -> str:
    return to_string(value).replace(".", "_")


def env(key: Any) -> str:
    """Read an environment variable, trying the name as given and then upper-cased."""
    name = to_string(key)
    if not name:
        return ""
    value = os.environ.get(name)
    if value is None:
        value = os.environ.get(name.upper(), "")
    return value


def _serialize(value: Any) -> bytes:
    if isinstance(value, Undefined):
        value = None
    try:
        return yaml.safe_dump(value, default_flow_style=False, sort_keys=True).encode("utf-8")
    except yaml.YAMLError as e:
        raise TemplateFunctionError(f"unable to encode object to YAML: {e}") from e


def sha1sum(value: Any) -> str:
    return hashlib.sha1(_serialize(value)).hexdigest()


def sha256sum(value: Any) -> str:
    return hashlib.sha256(_serialize(value)).hexdigest()


def _format_arg(value: Any) -> Any:
    if value is None or isinstance(value, (Undefined, bool, bytes)):
        return to_string(value)
    return value


def printf(fmt: Any, *args: Any) -> str:
    """printf-style formatting; ``%v`` is accepted as an alias of ``%s``.

    Numbers keep their type so ``%d`` and ``%.2f`` work on manifest values.
    """
    try:
        return to_string(fmt).replace("%v", "%s") % tuple(_format_arg(a) for a in args)
    except (TypeError, ValueError) as e:
        raise TemplateFunctionError(f"printf: {e}") from e


def index(mapping: Any, key: Any) -> Any:
    if not isinstance(mapping, dict):
        raise TemplateFunctionError("map is nil")
    if key is None or key == "":
        raise TemplateFunctionError("map key is empty")
    if key not in mapping:
        raise TemplateFunctionError(f"key {key!r} not found")
    return mapping[key]


def index_or_empty(mapping: Any, key: Any) -> Any:
    if not isinstance(mapping, dict) or key is None or key == "":
        return ""
    return mapping.get(key, "")


def pluralize(word: Any, count: int) -> str:
    s = to_string(word)
    return s if count == 1 else s + "s"


def build_functions() -> dict[str, Callable[..., Any]]:
    """Return a new name -> function table."""
    return {
        "lower": lower,
        "lowercase": lower,
        "upper": upper,
        "uppercase": upper,
        "title": title,
        "trim": trim,
        "trimPrefix": trim_prefix,
        "trimSuffix": trim_suffix,
        "replace": replace,
        "default": default,
        "required": required,
        "alphanumify": alphanumify,
        "alphanumdash": alphanumdash,
        "dottodash": dottodash,
        "dottounder": dottounder,
        "env": env,
        "sha1sum": sha1sum,
        "sha256sum": sha256sum,
        "str": to_string,
        "printf": printf,
        "sprintf": printf,
        "index": index,
        "indexOrEmpty": index_or_empty,
        "pluralize": pluralize,
    }


# Also callable as plain functions, e.g. {{ env("USER") }}.
GLOBAL_FUNCTIONS = ("env", "printf", "sprintf", "index", "indexOrEmpty", "pluralize")

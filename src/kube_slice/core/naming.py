"""Render destination file names from a Jinja2 template."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any

from jinja2 import ChainableUndefined, Environment, TemplateError, Undefined

from kube_slice.core.errors import EmptyNameError, RenderError
from kube_slice.core.template_funcs import (
    GLOBAL_FUNCTIONS,
    TemplateFunctionError,
    build_functions,
    to_string,
)
from kube_slice.models import ResourceIdentity

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "{{ kind | lower }}-{{ metadata.name }}.yaml"

# Printed for a missing value, removed again once the name is rendered.
NO_VALUE = "<no value>"

_SCALARS = (str, int, float, bool)

# Failures raised while a template runs: bad filter arguments, arithmetic on
# manifest values and the like.
_RENDER_FAILURES = (
    TemplateError,
    TemplateFunctionError,
    TypeError,
    ValueError,
    ArithmeticError,
    LookupError,
)


class MissingValue(ChainableUndefined):
    """A missing key. Looking up anything below it is missing as well."""

    __slots__ = ()

    def __str__(self) -> str:
        return NO_VALUE


def _finalize(value: Any) -> Any:
    if value is None or isinstance(value, Undefined):
        return NO_VALUE
    if isinstance(value, bool):
        return to_string(value)
    return value


class ManifestEnvironment(Environment):
    """Environment where ``a.b`` and ``a["b"]`` both mean a mapping lookup.

    Looking up a field on a scalar is an error instead of a silent miss.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, (dict, list, Undefined, type(None)) + _SCALARS):
            return self._lookup(obj, attribute)
        return super().getattr(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if isinstance(obj, (dict, list, Undefined, type(None)) + _SCALARS):
            return self._lookup(obj, argument)
        return super().getitem(obj, argument)

    def _lookup(self, obj: Any, key: Any) -> Any:
        if obj is None or isinstance(obj, Undefined):
            return self.undefined(obj=obj, name=key)
        if isinstance(obj, dict):
            if key in obj:
                return obj[key]
            return self.undefined(obj=obj, name=key)
        if isinstance(obj, list) and isinstance(key, int):
            try:
                return obj[key]
            except IndexError:
                return self.undefined(obj=obj, name=key)
        raise TemplateFunctionError(f"can't evaluate field {key} in type {type(obj).__name__}")


class NameRenderer:
    """Compiles a file name template once and renders it per document."""

    def __init__(self, template: str = DEFAULT_TEMPLATE):
        self.source = template or DEFAULT_TEMPLATE
        self.functions = MappingProxyType(build_functions())

        self._env = ManifestEnvironment(
            undefined=MissingValue,
            finalize=_finalize,
            autoescape=False,
        )
        self._env.filters.update(self.functions)
        self._env.globals.update({name: self.functions[name] for name in GLOBAL_FUNCTIONS})

        logger.debug("Compiling file name template %r", self.source)
        try:
            self._template = self._env.from_string(self.source)
        except TemplateError as e:
            raise RenderError(str(e)) from e

    def render(self, manifest: dict[str, Any], identity: ResourceIdentity, ordinal: int) -> str:
        try:
            rendered = self._template.render(manifest)
        except _RENDER_FAILURES as e:
            raise RenderError(str(e), ordinal=ordinal) from e

        name = rendered.strip()
        for token in (NO_VALUE, "\r", "\n"):
            name = name.replace(token, "")

        if not strip_extension(name):
            raise EmptyNameError(ordinal, identity)
        return name


def strip_extension(name: str) -> str:
    """Drop the extension of the last path element, if any."""
    dot = name.rfind(".")
    if dot > name.rfind("/"):
        return name[:dot]
    return name

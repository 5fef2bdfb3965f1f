#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/options/base.py
"""Base classes for livefind option dataclasses.

All option objects are frozen dataclasses so a session can hold on to the
options it was opened with while the surrounding UI builds modified copies.
"""

from __future__ import annotations

import difflib
import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from livefind.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, and to build instances from loosely-typed configuration
    mappings such as a parsed ``.livefind.toml`` section.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        ValidationError
            If a field name is unknown or a value fails validation

        """
        _check_field_names(type(self), kwargs)
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an instance from a configuration mapping.

        Keys may use dashes or underscores (``query-debounce-ms`` and
        ``query_debounce_ms`` are equivalent).

        Parameters
        ----------
        values : Mapping[str, Any]
            Raw configuration values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If a key does not name a field, or a value fails validation

        """
        normalized = {str(key).replace("-", "_"): value for key, value in values.items()}
        _check_field_names(cls, normalized)
        try:
            return cls(**normalized)
        except TypeError as e:
            raise ValidationError(f"Invalid value type in {cls.__name__} configuration: {e}", original_error=e) from e


def _check_field_names(cls: type, values: Mapping[str, Any]) -> None:
    known = [f.name for f in fields(cls)]
    for name in values:
        if name not in known:
            suggestion = difflib.get_close_matches(name, known, n=1)
            hint = f" Did you mean '{suggestion[0]}'?" if suggestion else ""
            raise ValidationError(
                f"Unknown option '{name}' for {cls.__name__}.{hint}",
                parameter_name=name,
            )

"""Base classes for fieldtoc options.

This module defines the foundation shared by the generation settings and the
renderer options: frozen dataclasses that can be cloned with changes and
built from plain configuration mappings.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from fieldtoc.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
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

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build an instance from a configuration mapping.

        Keys may use dashes instead of underscores (``field-types``) so
        that TOML and YAML files read naturally.

        Parameters
        ----------
        data : Mapping[str, Any]
            Option names and values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If the mapping contains keys that are not options of this class

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name in known:
                kwargs[name] = value
            else:
                unknown.append(str(key))

        if unknown:
            raise ValidationError(
                f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}",
                parameter_name=unknown[0],
                parameter_value=data[unknown[0]],
            )

        return cls(**kwargs)

    def to_mapping(self) -> dict[str, Any]:
        """Return the options as a plain dictionary of JSON-friendly values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, frozenset):
                value = sorted(":".join(v) if isinstance(v, tuple) else v for v in value)
            result[f.name] = value
        return result

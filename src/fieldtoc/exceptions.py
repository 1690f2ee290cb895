#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the fieldtoc library.

This module defines specialized exception classes for the error conditions
that can occur while generating a table of contents. Malformed HTML is not
one of them: the extractor degrades to "no headings" instead of raising.

Exception Hierarchy
-------------------
- FieldTocError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (config file discovery and parsing)
    - FieldShapeError (malformed field item handed over by the host)

  - UnsupportedEntityError (entity type or bundle not eligible for a ToC)

  - ExtractionError (heading extraction failures that cannot degrade)

  - RenderingError (ToC output generation failures)

  - DependencyError (missing optional packages)

"""

from __future__ import annotations

from typing import Any


class FieldTocError(Exception):
    """Base exception class for all fieldtoc-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(FieldTocError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be found or parsed.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying parse or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class FieldShapeError(ValidationError):
    """Exception raised when the host hands over a malformed field item.

    Parameters
    ----------
    message : str
        Description of the shape violation
    field_item : any, optional
        The offending object

    """

    def __init__(self, message: str, field_item: Any = None):
        """Initialize the field shape error."""
        super().__init__(message, parameter_name="field_item", parameter_value=field_item)
        self.field_item = field_item


class UnsupportedEntityError(FieldTocError):
    """Exception raised when a ToC is requested for an ineligible entity.

    Parameters
    ----------
    entity_type : str
        The entity type that was rejected
    bundle : str, optional
        The bundle of the rejected entity, when the bundle caused the rejection
    supported : iterable of str, optional
        What would have been accepted
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        entity_type: str,
        bundle: str | None = None,
        supported: Any = None,
        message: str | None = None,
    ):
        """Initialize the unsupported entity error."""
        if message is None:
            allowed = ", ".join(sorted(supported)) if supported else "none"
            if bundle is not None:
                message = f"Bundle '{bundle}' of entity type '{entity_type}' is not allowed (allowed: {allowed})"
            else:
                message = f"Cannot generate a table of contents for entity type '{entity_type}' (supported: {allowed})"
        super().__init__(message)
        self.entity_type = entity_type
        self.bundle = bundle
        self.supported = supported


class ExtractionError(FieldTocError):
    """Exception raised when heading extraction fails in a non-recoverable way.

    Parameters
    ----------
    message : str
        Description of the failure
    field_name : str, optional
        The field being scanned
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, field_name: str | None = None, original_error: Exception | None = None):
        """Initialize the extraction error."""
        super().__init__(message, original_error)
        self.field_name = field_name


class RenderingError(FieldTocError):
    """Exception raised when rendering a table of contents fails."""


class DependencyError(FieldTocError):
    """Exception raised when an optional package is not installed.

    Parameters
    ----------
    feature : str
        Name of the feature requiring the packages
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The underlying import or lookup error

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                message = (
                    f"{feature} requires the following packages: {pkg_list}\nInstall with: pip install {packages_str}"
                )
            else:
                message = f"{feature} is not available"
        super().__init__(message, original_error)
        self.feature = feature
        self.missing_packages = missing_packages


__all__ = [
    "FieldTocError",
    "ValidationError",
    "ConfigurationError",
    "FieldShapeError",
    "UnsupportedEntityError",
    "ExtractionError",
    "RenderingError",
    "DependencyError",
]

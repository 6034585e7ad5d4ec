#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the gfmhost library.

This module defines the exception classes raised while normalizing option
records, loading configuration and compiling Markdown. Rendering failures are
the one tier that host-facing functions never let escape: the adapter turns
them into plain reason strings.

Exception Hierarchy
-------------------
- GfmHostError (base exception)

  - ValidationError (parameter/option validation)
    - OptionsTypeError (options argument is not a mapping)
    - InputTypeError (markdown text is not text)

  - ConfigError (configuration file loading)

  - RenderingError (Markdown to HTML conversion failures)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class GfmHostError(Exception):
    """Base exception class for all gfmhost-specific errors.

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


class ValidationError(GfmHostError):
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


class OptionsTypeError(ValidationError):
    """Exception raised when an options record is not a mapping.

    Individual fields of a record never raise; only the shape of the record
    itself is checked at the host boundary.

    Parameters
    ----------
    received_type : type
        The type of the value passed where a record was expected
    message : str, optional
        Custom error message. If not provided, generates one from the type

    """

    def __init__(self, received_type: type, message: str | None = None):
        """Initialize the options type error."""
        if message is None:
            message = f"options must be a mapping of option names to values, got '{received_type.__name__}'"
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.received_type = received_type


class InputTypeError(ValidationError):
    """Exception raised when the markdown argument cannot be read as text.

    Parameters
    ----------
    message : str
        Description of the problem
    received_type : type
        The type of the value passed as markdown text
    original_error : Exception, optional
        Decoding error, when the input was undecodable bytes

    """

    def __init__(self, message: str, received_type: type, original_error: Exception | None = None):
        """Initialize the input type error."""
        super().__init__(
            message, parameter_name="markdown_text", parameter_value=received_type, original_error=original_error
        )
        self.received_type = received_type


class ConfigError(GfmHostError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Path to the configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class RenderingError(GfmHostError):
    """Exception raised when Markdown to HTML conversion fails.

    The ``message`` is the human-readable reason reported back to hosts in
    place of HTML.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(GfmHostError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        First import error encountered while checking

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{feature_name} support requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{feature_name} support has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches

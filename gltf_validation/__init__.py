"""Test-suite helpers around the Khronos glTF Validator command line tool."""

from gltf_validation.config import (
    ValidatorConfig,
    default_executable_path,
    get_default_config,
    set_default_config,
)
from gltf_validation.launcher import ValidatorLauncher, validate_file
from gltf_validation.models import (
    UNSUPPORTED_EXTENSION,
    ReportFormatError,
    Severity,
    ValidationImage,
    ValidationInfo,
    ValidationIssues,
    ValidationMessage,
    ValidationReport,
    ValidationResources,
)

__all__ = [
    "UNSUPPORTED_EXTENSION",
    "ReportFormatError",
    "Severity",
    "ValidationImage",
    "ValidationInfo",
    "ValidationIssues",
    "ValidationMessage",
    "ValidationReport",
    "ValidationResources",
    "ValidatorConfig",
    "ValidatorLauncher",
    "default_executable_path",
    "get_default_config",
    "set_default_config",
    "validate_file",
]

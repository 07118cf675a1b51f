import json
from dataclasses import dataclass, fields, is_dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, Union, get_args, get_origin, get_type_hints


class ReportFormatError(ValueError):
    """Raised when validator output does not match the expected report shape."""


class Severity(IntEnum):
    ERROR = 0
    WARNING = 1
    INFO = 2
    HINT = 3


UNSUPPORTED_EXTENSION = "UNSUPPORTED_EXTENSION"


@dataclass(frozen=True)
class ValidationMessage:
    code: str = ""
    message: str = ""
    severity: int = Severity.ERROR
    pointer: str = ""
    offset: Optional[int] = None

    def __post_init__(self):
        if self.severity not in tuple(Severity):
            raise ValueError(f"Invalid severity {self.severity!r} for message '{self.code}'")

    @property
    def level(self) -> Severity:
        return Severity(self.severity)


@dataclass(frozen=True)
class ValidationIssues:
    num_errors: int = 0
    num_warnings: int = 0
    num_infos: int = 0
    num_hints: int = 0
    messages: Optional[Tuple[ValidationMessage, ...]] = None  # absent when the tool reports none
    truncated: bool = False

    def __post_init__(self):
        for name in ("num_errors", "num_warnings", "num_infos", "num_hints"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@dataclass(frozen=True)
class ValidationImage:
    width: int = 0
    height: int = 0
    format: str = ""
    primaries: str = ""
    transfer: str = ""
    bits: int = 0


@dataclass(frozen=True)
class ValidationResources:
    """An external or embedded resource referenced by the validated asset."""
    pointer: str = ""
    storage: str = ""
    mime_type: str = ""
    uri: str = ""
    byte_length: int = 0
    image: Optional[ValidationImage] = None


@dataclass(frozen=True)
class ValidationInfo:
    """Asset-level statistics collected by the validator."""
    version: str = ""
    min_version: str = ""
    generator: str = ""
    extensions_used: Optional[Tuple[str, ...]] = None
    extensions_required: Optional[Tuple[str, ...]] = None
    resources: Optional[Tuple[ValidationResources, ...]] = None
    animation_count: int = 0
    material_count: int = 0
    has_morph_targets: bool = False
    has_skins: bool = False
    has_textures: bool = False
    has_default_scene: bool = False
    draw_call_count: int = 0
    total_vertex_count: int = 0
    total_triangle_count: int = 0
    max_uvs: int = 0
    max_influences: int = 0
    max_attributes: int = 0


@dataclass(frozen=True)
class ValidationReport:
    """
    Report produced by the Khronos glTF Validator.

    See https://github.com/KhronosGroup/glTF-Validator/blob/main/docs/validation.schema.json
    """
    uri: str = ""
    mime_type: str = ""
    validator_version: str = ""
    validated_at: str = ""
    issues: Optional[ValidationIssues] = None
    info: Optional[ValidationInfo] = None

    @classmethod
    def parse(cls, text: str) -> "ValidationReport":
        """Builds a report from the validator's JSON output."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ReportFormatError(f"Validator output is not valid JSON: {e}") from e
        return _from_dict(cls, data, "")

    @property
    def has_warnings(self) -> bool:
        return self.issues is not None and self.issues.num_warnings > 0

    @property
    def has_errors(self) -> bool:
        return self.issues is not None and self.issues.num_errors > 0

    @property
    def messages(self) -> Tuple[ValidationMessage, ...]:
        if self.issues is None or self.issues.messages is None:
            return ()
        return self.issues.messages

    @property
    def errors(self):
        return self._texts(Severity.ERROR)

    @property
    def warnings(self):
        return self._texts(Severity.WARNING)

    @property
    def infos(self):
        return self._texts(Severity.INFO)

    @property
    def hints(self):
        return self._texts(Severity.HINT)

    def _texts(self, severity):
        return [m.message for m in self.messages if m.severity == severity]

    def find_messages(self, code):
        """Returns every message reported under the given code."""
        return [m for m in self.messages if m.code == code]

    def has_code(self, code):
        return any(m.code == code for m in self.messages)

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __str__(self):
        return self.to_json()


# ── JSON mapping ───────────────────────────────────────────────────

def _json_key(name):
    # mime_type -> mimetype matches mimeType; max_uvs -> maxuvs matches maxUVs
    return name.replace("_", "").lower()


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_DEFAULTS = {str: "", int: 0, bool: False}


def _decode(tp, value, path):
    if get_origin(tp) is Union:
        if value is None:
            return None
        inner = next(arg for arg in get_args(tp) if arg is not type(None))
        return _decode(inner, value, path)

    if value is None:
        return _DEFAULTS.get(tp)

    if get_origin(tp) is tuple:
        if not isinstance(value, list):
            raise ReportFormatError(f"{path}: expected an array, got {type(value).__name__}")
        item_tp = get_args(tp)[0]
        return tuple(_decode(item_tp, item, f"{path}/{i}") for i, item in enumerate(value))

    if is_dataclass(tp):
        return _from_dict(tp, value, path)

    # bool is an int subclass, so it has to be ruled out explicitly
    if tp is int and isinstance(value, int) and not isinstance(value, bool):
        return value
    if tp is bool and isinstance(value, bool):
        return value
    if tp is str and isinstance(value, str):
        return value

    raise ReportFormatError(f"{path}: expected {tp.__name__}, got {type(value).__name__}")


def _from_dict(cls, data, path):
    if not isinstance(data, dict):
        raise ReportFormatError(
            f"{path or '/'}: expected an object for {cls.__name__}, got {type(data).__name__}"
        )

    by_key = {key.lower(): value for key, value in data.items()}
    hints = get_type_hints(cls)

    kwargs = {}
    for f in fields(cls):
        key = _json_key(f.name)
        if key in by_key:
            kwargs[f.name] = _decode(hints[f.name], by_key[key], f"{path}/{_camel(f.name)}")

    try:
        return cls(**kwargs)
    except ValueError as e:
        raise ReportFormatError(f"{path or '/'}: {e}") from e


def _to_dict(obj):
    if is_dataclass(obj):
        return {_camel(f.name): _to_dict(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, tuple):
        return [_to_dict(item) for item in obj]
    if isinstance(obj, IntEnum):
        return int(obj)
    return obj

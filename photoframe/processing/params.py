from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..errors import InvalidParameter
from .palette import ColorMethod


class ProcessingMode(str, Enum):
    STOCK = "stock"
    ENHANCED = "enhanced"


class ToneMode(str, Enum):
    SCURVE = "scurve"
    CONTRAST = "contrast"


# camelCase aliases accepted from form and query input
_ALIASES = {
    "processingMode": "processing_mode",
    "toneMode": "tone_mode",
    "shadowBoost": "shadow_boost",
    "highlightCompress": "highlight_compress",
    "colorMethod": "color_method",
    "renderMeasured": "render_measured",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class OptimizationParams:
    processing_mode: ProcessingMode = ProcessingMode.ENHANCED
    tone_mode: ToneMode = ToneMode.SCURVE
    exposure: float = 1.0
    saturation: float = 1.3
    contrast: float = 1.0
    strength: float = 0.9
    shadow_boost: float = 0.0
    highlight_compress: float = 1.5
    midpoint: float = 0.5
    color_method: ColorMethod = ColorMethod.RGB
    render_measured: bool = True

    def __post_init__(self) -> None:
        if not 0.0 < self.midpoint < 1.0:
            raise InvalidParameter("midpoint", "must lie strictly between 0 and 1")
        for name in ("exposure", "saturation", "contrast"):
            if getattr(self, name) < 0:
                raise InvalidParameter(name, "must not be negative")

    @property
    def is_stock(self) -> bool:
        return self.processing_mode == ProcessingMode.STOCK

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data

    def cache_key(self) -> str:
        return ",".join(f"{key}={value}" for key, value in sorted(self.to_dict().items()))

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, Any],
        base: Optional["OptimizationParams"] = None,
    ) -> "OptimizationParams":
        """Overlay recognised fields from ``payload`` onto ``base``.

        Unknown keys are ignored. Raises ``InvalidParameter`` naming the first
        field that cannot be coerced.
        """
        updates, errors = coerce_fields(payload)
        if errors:
            name, message = next(iter(errors.items()))
            raise InvalidParameter(name, message)
        return replace(base or cls(), **updates)


def coerce_bool(raw_value: Any) -> bool:
    if isinstance(raw_value, bool):
        return raw_value
    text = str(raw_value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(raw_value)


def coerce_fields(payload: Mapping[str, Any]):
    """Return ``(applied, errors)`` for the params fields found in ``payload``."""
    normalized = {_ALIASES.get(key, key): value for key, value in payload.items()}
    applied: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for field in fields(OptimizationParams):
        if field.name not in normalized:
            continue

        raw_value = normalized[field.name]
        if isinstance(raw_value, Enum):
            raw_value = raw_value.value
        default = field.default
        try:
            if isinstance(default, Enum):
                coerced = type(default)(str(raw_value).strip().lower())
            elif isinstance(default, bool):
                coerced = coerce_bool(raw_value)
            else:
                coerced = float(raw_value)
        except (TypeError, ValueError):
            if isinstance(default, Enum):
                choices = ", ".join(member.value for member in type(default))
                errors[field.name] = f"Expected one of {choices}"
            elif isinstance(default, bool):
                errors[field.name] = "Expected a boolean"
            else:
                errors[field.name] = "Expected float"
            continue
        applied[field.name] = coerced

    return applied, errors

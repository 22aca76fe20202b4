"""Runtime configuration for DNM parameter presets."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Callable, Mapping

from plaindom.dnm.parameters import DNMParameters


DEFAULT_PRESET = "default"

PRESETS: dict[str, Callable[[], DNMParameters]] = {
    "default": DNMParameters.default,
    "llamapun": DNMParameters.llamapun_normalization,
}

FLAG_ENV_VARS: dict[str, str] = {
    "normalize_white_spaces": "DNM_NORMALIZE_WHITE_SPACES",
    "wrap_tokens": "DNM_WRAP_TOKENS",
    "normalize_unicode": "DNM_NORMALIZE_UNICODE",
    "stem_words_once": "DNM_STEM_WORDS_ONCE",
    "stem_words_full": "DNM_STEM_WORDS_FULL",
    "convert_to_lowercase": "DNM_CONVERT_TO_LOWERCASE",
    "support_back_mapping": "DNM_SUPPORT_BACK_MAPPING",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(*, name: str, raw_value: str) -> bool:
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {raw_value!r}")


def build_parameters_for_preset(name: str) -> DNMParameters:
    """Build a fresh parameter set for a named preset."""

    try:
        factory = PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise ValueError(f"Unknown DNM preset {name!r}; expected one of: {known}") from None
    return factory()


@dataclass(frozen=True, slots=True)
class DNMSettings:
    """Validated preset name plus explicit flag overrides."""

    preset: str = DEFAULT_PRESET
    overrides: Mapping[str, bool] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, preset: str | None = None) -> "DNMSettings":
        """Load settings; an explicit ``preset`` replaces DNM_PRESET entirely."""

        source: Mapping[str, str] = os.environ if environ is None else environ

        if preset is None:
            preset = source.get("DNM_PRESET", DEFAULT_PRESET)
        preset = preset.strip()
        if not preset:
            raise ValueError("DNM_PRESET cannot be empty")
        if preset not in PRESETS:
            known = ", ".join(sorted(PRESETS))
            raise ValueError(f"DNM_PRESET must be one of: {known}")

        overrides: dict[str, bool] = {}
        for flag, env_name in FLAG_ENV_VARS.items():
            raw_value = source.get(env_name)
            if raw_value is None:
                continue
            if not raw_value.strip():
                raise ValueError(f"{env_name} cannot be empty")
            overrides[flag] = _parse_bool(name=env_name, raw_value=raw_value)

        return cls(preset=preset, overrides=overrides)

    def with_overrides(self, **flags: bool) -> "DNMSettings":
        merged = dict(self.overrides)
        merged.update(flags)
        return DNMSettings(preset=self.preset, overrides=merged)

    def build_parameters(self) -> DNMParameters:
        params = build_parameters_for_preset(self.preset)
        if not self.overrides:
            return params
        return params.with_overrides(**self.overrides)

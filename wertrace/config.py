"""Configuration model and loaders for wertrace.

Responsibilities:
- Define evaluation configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `EvaluationConfig`: normalized settings for one evaluation run.
- `ConfigLoader`: static construction helpers for `EvaluationConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .alignment.aligner import DEFAULT_MAX_TOKENS
from .models.datatypes import PreprocessingOptions
from .parsing import coerce_boolean, coerce_positive_int, is_blank


@dataclass(slots=True)
class EvaluationConfig:
    """Runtime configuration for one evaluation run.

    Attributes:
        preprocess: Whether to normalize texts at all; `False` tokenizes verbatim.
        lowercase: Fold texts to lowercase before tokenization.
        remove_punctuation: Replace punctuation with spaces.
        remove_extra_spaces: Collapse and trim whitespace.
        max_tokens: Upper bound on tokens per side before alignment is refused.
        workers: Thread count used for batch evaluation.
    """

    preprocess: bool = True
    lowercase: bool = True
    remove_punctuation: bool = True
    remove_extra_spaces: bool = True
    max_tokens: int = DEFAULT_MAX_TOKENS
    workers: int = 1

    def validate(self) -> None:
        """Validate configuration values before evaluation."""

        if isinstance(self.max_tokens, bool) or self.max_tokens <= 0:
            raise ValueError("`max_tokens` must be a positive integer.")
        if isinstance(self.workers, bool) or self.workers <= 0:
            raise ValueError("`workers` must be a positive integer.")

    def preprocessing_options(self) -> PreprocessingOptions | None:
        """Return normalization options, or `None` for verbatim tokenization."""

        if not self.preprocess:
            return None
        return PreprocessingOptions(
            lowercase=self.lowercase,
            remove_punctuation=self.remove_punctuation,
            remove_extra_spaces=self.remove_extra_spaces,
        )


_BOOLEAN_EXPECTATION = "a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)"
_POSITIVE_INT_EXPECTATION = "a positive integer"

# key -> (coercion, expectation used in error messages)
_FIELD_COERCIONS: dict[str, tuple[Callable[[object], Any], str]] = {
    "preprocess": (coerce_boolean, _BOOLEAN_EXPECTATION),
    "lowercase": (coerce_boolean, _BOOLEAN_EXPECTATION),
    "remove_punctuation": (coerce_boolean, _BOOLEAN_EXPECTATION),
    "remove_extra_spaces": (coerce_boolean, _BOOLEAN_EXPECTATION),
    "max_tokens": (coerce_positive_int, _POSITIVE_INT_EXPECTATION),
    "workers": (coerce_positive_int, _POSITIVE_INT_EXPECTATION),
}


class ConfigLoader:
    """Factory methods for creating `EvaluationConfig` from external sources.

    Blank values (`~`, empty strings) leave the default in place.
    """

    _ENV_PREFIX = "WERTRACE_"

    @staticmethod
    def from_yaml(path: Path) -> EvaluationConfig:
        """Create a validated config from a YAML file."""

        payload = ConfigLoader._parse_yaml_payload(path.read_text(encoding="utf-8"), path)

        unknown = sorted(str(key) for key in set(payload).difference(_FIELD_COERCIONS))
        if unknown:
            raise ValueError(f"YAML `{path}` includes unsupported key(s): {', '.join(unknown)}.")

        return ConfigLoader._build(
            {key: payload.get(key) for key in _FIELD_COERCIONS},
            lambda key: f"YAML `{path}` field `{key}`",
        )

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> EvaluationConfig:
        """Create a validated config from `WERTRACE_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        prefix = ConfigLoader._ENV_PREFIX
        return ConfigLoader._build(
            {key: env_map.get(prefix + key.upper()) for key in _FIELD_COERCIONS},
            lambda key: f"Environment variable `{prefix + key.upper()}`",
        )

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build(
        raw_values: Mapping[str, object], describe: Callable[[str], str]
    ) -> EvaluationConfig:
        """Coerce raw field values over the defaults and validate the result."""

        values: dict[str, Any] = {}
        for key, raw in raw_values.items():
            if is_blank(raw):
                continue
            coerce, expectation = _FIELD_COERCIONS[key]
            parsed = coerce(raw)
            if parsed is None:
                raise ValueError(f"{describe(key)} must be {expectation}.")
            values[key] = parsed

        config = EvaluationConfig(**values)
        config.validate()
        return config

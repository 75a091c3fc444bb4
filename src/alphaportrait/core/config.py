from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from alphaportrait.core.errors import ConfigError

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_ASPECT_RATIO = "3:4"

API_KEY_VARS = ("GEMINI_API_KEY", "API_KEY")
MODEL_VAR = "ALPHAPORTRAIT_MODEL"


@dataclass(frozen=True)
class EnhancerConfig:
    """
    Settings handed to EnhancementClient at construction time.

    api_key:
        Credential for the Gemini API. Passed explicitly so the client never
        reads the process environment on its own.
    model_name:
        Image generation model to call. Default gemini-2.5-flash-image.
    aspect_ratio:
        Aspect-ratio hint attached to every request. Default 3:4 (portrait).
    """
    api_key: str
    model_name: str = DEFAULT_MODEL
    aspect_ratio: str = DEFAULT_ASPECT_RATIO

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EnhancerConfig":
        env = os.environ if env is None else env
        api_key = next((env[k] for k in API_KEY_VARS if env.get(k)), None)
        if not api_key:
            raise ConfigError(f"Set {API_KEY_VARS[0]} to your Gemini API key.")
        return EnhancerConfig(api_key=api_key, model_name=env.get(MODEL_VAR) or DEFAULT_MODEL)

    def __repr__(self) -> str:
        # keep the credential out of logs and tracebacks
        return f"EnhancerConfig(api_key='***', model_name={self.model_name!r}, aspect_ratio={self.aspect_ratio!r})"

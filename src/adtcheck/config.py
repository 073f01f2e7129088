"""Engine settings.

Priority chain (highest to lowest):
  1. Init kwargs   - EngineSettings(strict=False)
  2. Env vars      - ``ADTCHECK_*`` prefix
  3. Code defaults - baked into the model below
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings shared by registries and validators, frozen after construction."""

    model_config = SettingsConfigDict(env_prefix="ADTCHECK_", frozen=True)

    # Variant fields are mandatory even when declared optional
    strict: bool = True
    # New registries pre-register one PrimitiveDecl per primitive tag
    seed_primitives: bool = True
    verbose: bool = False
    log_json: bool = False

# src/sinkwatch/core/config.py
"""
Configuration schema and loading for sink verification runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from sinkwatch.contracts.metrics import EXPECTED_GC_METRIC_KEYS, GC_METRIC_PREFIX
from sinkwatch.engine.tailer import DEFAULT_POLL_INTERVAL
from sinkwatch.engine.waiter import DEFAULT_DELAY_SECONDS, DEFAULT_MAX_ATTEMPTS


class TailerSettings(BaseModel):
    """How often the background tailer re-reads the sink file."""

    model_config = {"frozen": True, "extra": "forbid"}

    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds between reads of the sink file",
    )


class WaitSettings(BaseModel):
    """Retry budget for waiting on the next sink update.

    The collector reports once per cycle, so the budget
    (max_attempts * delay_seconds) must exceed one collection period.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, gt=0, description="Polls per wait")
    delay_seconds: float = Field(default=DEFAULT_DELAY_SECONDS, gt=0, description="Pause between polls")

    @property
    def max_wait_seconds(self) -> float:
        """Worst-case time a single wait can block."""
        return self.max_attempts * self.delay_seconds


class MetricsSettings(BaseModel):
    """Which metrics to extract and which must be present."""

    model_config = {"frozen": True, "extra": "forbid"}

    prefix: str = Field(default=GC_METRIC_PREFIX, min_length=1, description="Metric name prefix to keep")
    expected_keys: tuple[str, ...] = Field(
        default=EXPECTED_GC_METRIC_KEYS,
        description="Metrics every sample must contain",
    )

    @field_validator("expected_keys")
    @classmethod
    def validate_unique_keys(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        duplicates = sorted({key for key in v if v.count(key) > 1})
        if duplicates:
            raise ValueError(f"expected_keys contains duplicates: {duplicates}")
        return v

    @model_validator(mode="after")
    def validate_keys_match_prefix(self) -> "MetricsSettings":
        # Keys without the prefix are filtered out by the parser and could never be found
        unreachable = [key for key in self.expected_keys if not key.startswith(self.prefix)]
        if unreachable:
            raise ValueError(f"expected_keys {unreachable} do not start with prefix {self.prefix!r}")
        return self


class SinkWatchSettings(BaseModel):
    """Top-level settings for one verification run."""

    model_config = {"frozen": True, "extra": "forbid"}

    sink_path: Path = Field(description="Metrics sink file written by the collector")
    tailer: TailerSettings = Field(default_factory=TailerSettings)
    wait: WaitSettings = Field(default_factory=WaitSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    discard_first_update: bool = Field(
        default=True,
        description="Ignore the first observed line; it may be left over from a previous run",
    )


def load_settings(config_path: Path) -> SinkWatchSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SINKWATCH_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: SINKWATCH_WAIT__MAX_ATTEMPTS for nested keys.

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SINKWATCH",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config: dict[str, Any] = {
        k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys
    }

    # Relative sink paths are relative to the config file
    sink_path = raw_config.get("sink_path")
    if sink_path is not None and not Path(sink_path).is_absolute():
        raw_config["sink_path"] = (config_path.parent / sink_path).resolve()

    return SinkWatchSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value

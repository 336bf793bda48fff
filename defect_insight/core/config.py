"""
Application configuration for Defect Insight.

Provides environment-aware settings with conservative defaults. Detection
thresholds and the reference catalogues (car models, stations, ...) are
configurable so that no analytics function depends on a hidden constant.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionConfig(BaseModel):
    """
    Defaults for the anomaly detection strategies.

    Notes:
    - default_std_multiplier: frequency-outlier control value when none is given.
    - default_zscore_threshold: z-score control value when none is given.
    - iqr_multiplier: fence width around the interquartile range.
    - q1_fraction / q3_fraction: nearest-rank positions of the quartiles.
    """

    default_std_multiplier: float = Field(2.0, description="Std-dev multiplier for frequency outliers")
    default_zscore_threshold: float = Field(3.0, ge=0.0, description="Absolute z-score threshold")
    iqr_multiplier: float = Field(1.5, ge=0.0)
    q1_fraction: float = Field(0.25, ge=0.0, lt=1.0)
    q3_fraction: float = Field(0.75, ge=0.0, lt=1.0)

    default_status: str = Field("under review", description="Workflow state of new anomalies")
    system_flagger: str = Field("system", description="flagged_by value for automatic detections")

    @model_validator(mode="after")
    def _check_quartiles(self) -> "DetectionConfig":
        if self.q1_fraction >= self.q3_fraction:
            raise ValueError("q1_fraction must be lower than q3_fraction")
        return self


class CatalogueConfig(BaseModel):
    """
    Reference catalogues used by the rate breakdowns.
    """

    car_models: List[str] = Field(
        default_factory=lambda: ["Base", "IX0M", "Long", "Alpina", "Pick-Up"]
    )
    motor_types: List[str] = Field(
        default_factory=lambda: ["High Performance", "Long Range", "Standard"]
    )
    design_packages: List[str] = Field(
        default_factory=lambda: ["Eco", "Luxury", "Offroad", "Race"]
    )
    stations: List[str] = Field(
        default_factory=lambda: [
            "Axle Installation",
            "Dashboard Installation",
            "EV Battery Installation",
            "First Row Seats Installation",
            "Headlight Installation",
            "Rear Bumper Installation",
            "Second Row Seats Installation",
            "Steering Wheel Installation",
            "Tire And Rim Installation",
            "Windshield Installation",
            "Wire Harness Installation",
        ]
    )


class Config(BaseSettings):
    """
    Global configuration with environment overrides.

    Nested values can be overridden with a double underscore, e.g.
    DEFECT_DETECTION__IQR_MULTIPLIER=3.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEFECT_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Default logging level")
    logs_dir: Path = Field(Path("logs"), description="Directory for log files")
    detection: DetectionConfig = DetectionConfig()
    catalogue: CatalogueConfig = CatalogueConfig()


config = Config()

"""
Unit tests for configuration and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from defect_insight.core.config import Config, DetectionConfig
from defect_insight.core.logging_config import setup_logging


class TestConfig:

    def test_defaults(self):
        cfg = Config()
        assert cfg.detection.default_std_multiplier == 2.0
        assert cfg.detection.iqr_multiplier == 1.5
        assert "Axle Installation" in cfg.catalogue.stations
        assert cfg.catalogue.car_models[0] == "Base"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DEFECT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("DEFECT_DETECTION__IQR_MULTIPLIER", "3")

        cfg = Config()

        assert cfg.log_level == "DEBUG"
        assert cfg.detection.iqr_multiplier == 3.0

    def test_quartile_order_validated(self):
        with pytest.raises(ValidationError):
            DetectionConfig(q1_fraction=0.8, q3_fraction=0.2)


class TestSetupLogging:

    def test_handlers_and_idempotence(self, tmp_path):
        name = "defect_insight_test_logger"
        try:
            logger = setup_logging(name, level="DEBUG", log_dir=tmp_path / "logs")

            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            assert (tmp_path / "logs").is_dir()

            again = setup_logging(name, level="DEBUG", log_dir=tmp_path / "logs")
            assert again is logger
            assert len(again.handlers) == 2
        finally:
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

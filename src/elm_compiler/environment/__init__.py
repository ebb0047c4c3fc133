"""Environment detection utilities."""

from .detectors import EnvironmentReport, ToolCheck, detect_environment

__all__ = ["EnvironmentReport", "ToolCheck", "detect_environment"]

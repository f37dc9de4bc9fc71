"""Shared base for stateful geotrack components such as the analyzer and the feed."""

from __future__ import annotations

import logging

from .config import AnalyzerConfig


class PipelineComponent:
    """Hold the analyzer settings and a logger named after the component class."""

    def __init__(self, config: AnalyzerConfig) -> None:
        self.config: AnalyzerConfig = config
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)

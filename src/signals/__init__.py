"""Lantern signal extraction package."""

from signals.document import PageDocument
from signals.extractor import SignalExtractor, extract_signals, run_detectors
from signals.models import DetectionResult, SchemaMarkup, SignalSet
from signals.registry import Detector

__all__ = [
    "PageDocument",
    "SignalExtractor",
    "extract_signals",
    "run_detectors",
    "DetectionResult",
    "SchemaMarkup",
    "SignalSet",
    "Detector",
]

"""Learning progress report (summary and PDF)."""

from .pdf import render_learning_report
from .schemas import LearningReport
from .service import build_learning_report


__all__ = ["LearningReport", "build_learning_report", "render_learning_report"]

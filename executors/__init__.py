# Executors module

from executors.run_extraction import run_extraction
from executors.run_assessment import run_assessment, parse_requirements
from executors.run_analysis import run_analysis, parse_analysis_input

__all__ = [
    "run_extraction",
    "run_assessment",
    "parse_requirements",
    "run_analysis",
    "parse_analysis_input",
]

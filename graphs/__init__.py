# Graphs module

from graphs.extraction import create_extraction_graph
from graphs.assessment import create_assessment_graph
from graphs.analysis import create_analysis_graph

__all__ = ["create_extraction_graph", "create_assessment_graph", "create_analysis_graph"]

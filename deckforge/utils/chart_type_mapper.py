"""
Chart Type Mapper for Deckforge
===============================

Maps chart type keywords and slide intents to the six chart forms the
ChartSynthesizer can draw: pie, doughnut, bar, line, timeline, funnel.

Used when a statistics payload names its own chart type (e.g. "donut",
"column chart") and when the chart type must be inferred from the slide's
intent tag (e.g. "market" -> pie).
"""

import re
from typing import Dict, List, Optional, Tuple

from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_CHART_TYPE = "bar"

SUPPORTED_CHART_TYPES = {"pie", "doughnut", "bar", "line", "timeline", "funnel"}


class ChartTypeMapper:
    """
    Maps natural language chart type names and slide intents to chart types.

    Examples:
    - "donut chart"      -> "doughnut"
    - "column"           -> "bar"
    - intent "traction"  -> "line"
    """

    # Mapping from keywords to chart types
    CHART_TYPE_MAPPINGS: Dict[str, str] = {
        # Pie variations
        "pie": "pie",
        "pie chart": "pie",
        "share": "pie",

        # Doughnut variations
        "doughnut": "doughnut",
        "doughnut chart": "doughnut",
        "donut": "doughnut",
        "donut chart": "doughnut",
        "ring": "doughnut",

        # Bar variations
        "bar": "bar",
        "bar chart": "bar",
        "vertical bar": "bar",
        "column": "bar",
        "column chart": "bar",

        # Line variations
        "line": "line",
        "line chart": "line",
        "trend": "line",
        "trend line": "line",

        # Timeline variations
        "timeline": "timeline",
        "milestones": "timeline",
        "roadmap": "timeline",

        # Funnel variations
        "funnel": "funnel",
        "funnel chart": "funnel",
        "pipeline": "funnel",
    }

    # Intent keywords, checked in order; first substring hit wins
    INTENT_CHART_TYPES: List[Tuple[str, str]] = [
        ("go-to-market", "funnel"),
        ("funnel", "funnel"),
        ("market", "pie"),
        ("share", "pie"),
        ("competition", "bar"),
        ("comparison", "bar"),
        ("traction", "line"),
        ("growth", "line"),
        ("financials", "line"),
        ("revenue", "line"),
        ("roadmap", "timeline"),
        ("milestone", "timeline"),
        ("timeline", "timeline"),
    ]

    @classmethod
    def resolve_chart_type(cls, name: Optional[str]) -> Optional[str]:
        """
        Resolve a chart type name to a supported chart type.

        Args:
            name: Chart type as supplied (any case, may include "chart")

        Returns:
            Supported chart type, or None if the name is not recognised
        """
        if not name:
            return None

        normalized = re.sub(r"[\s_]+", " ", name.strip().lower())
        chart_type = cls.CHART_TYPE_MAPPINGS.get(normalized)
        if chart_type is None:
            logger.debug(f"Unrecognised chart type '{name}'")
        return chart_type

    @classmethod
    def infer_from_intent(cls, intent: Optional[str]) -> str:
        """Chart type for a slide intent tag, defaulting to bar."""
        intent_lower = (intent or "").lower()
        for keyword, chart_type in cls.INTENT_CHART_TYPES:
            if keyword in intent_lower:
                return chart_type
        return DEFAULT_CHART_TYPE

    @classmethod
    def is_valid_chart_type(cls, chart_type: str) -> bool:
        return chart_type in SUPPORTED_CHART_TYPES

    @classmethod
    def get_chart_type_display_name(cls, chart_type: str) -> str:
        display_names = {
            "pie": "Pie Chart",
            "doughnut": "Doughnut Chart",
            "bar": "Bar Chart",
            "line": "Line Chart",
            "timeline": "Timeline",
            "funnel": "Funnel",
        }
        return display_names.get(chart_type, chart_type)


# Convenience functions
def resolve_chart_type(name: Optional[str]) -> Optional[str]:
    """Resolve a chart type keyword (convenience function)."""
    return ChartTypeMapper.resolve_chart_type(name)


def infer_chart_type(intent: Optional[str]) -> str:
    """Infer a chart type from a slide intent (convenience function)."""
    return ChartTypeMapper.infer_from_intent(intent)

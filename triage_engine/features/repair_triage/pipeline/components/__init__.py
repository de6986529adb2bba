"""
Component matching package.

Infers which spare part an issue needs and whether the catalog can
supply it.
"""

from .service import COMPONENT_KEYWORDS, ComponentMatcher, component_matcher, text_mentions

__all__ = ["COMPONENT_KEYWORDS", "ComponentMatcher", "component_matcher", "text_mentions"]

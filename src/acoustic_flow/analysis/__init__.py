"""Views of the scene for downstream consumers."""

from acoustic_flow.analysis.summary import explanation_prompt, scene_summary

__all__ = [
    "scene_summary",
    "explanation_prompt",
]

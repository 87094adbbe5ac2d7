# Safety package: local high-risk phrase detection for the chat pipeline.

from .classifier import SafetyClassifier, load_patterns

__all__ = ["SafetyClassifier", "load_patterns"]

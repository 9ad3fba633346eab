"""
Knowledge Tree - roadmap learning platform.

Roadmaps of topics, prerequisite-gated unlocking, quiz-based completion.
"""

__version__ = "0.1.0"

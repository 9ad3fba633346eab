"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from knowledge_tree.config import Settings
from knowledge_tree.engines.roadmap.layout_engine import LayoutMode
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockPolicy


class TestSettings:
    """Tests for roadmap-related settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("UNLOCK_POLICY", raising=False)
        monkeypatch.delenv("LAYOUT_MODE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.unlock_policy == UnlockPolicy.PREREQUISITES
        assert settings.layout_mode == LayoutMode.LAYERED
        assert settings.pass_threshold == 80

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("UNLOCK_POLICY", "linear")
        monkeypatch.setenv("LAYOUT_MODE", "snake")
        settings = Settings(_env_file=None)
        assert settings.unlock_policy is UnlockPolicy.LINEAR
        assert settings.layout_mode is LayoutMode.SNAKE

    def test_unknown_unlock_policy_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, unlock_policy="bogus")

    def test_unknown_layout_mode_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, layout_mode="diagonal")

    def test_unknown_policy_in_environment_rejected(self, monkeypatch):
        monkeypatch.setenv("UNLOCK_POLICY", "bogus")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

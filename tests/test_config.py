"""Tests for config.py — defaults and environment overrides."""

from __future__ import annotations

import pytest

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig, GesturePolicy, load_config


class TestDefaults:
    def test_geometry(self):
        assert DEFAULT_CONFIG.grid_unit == 20
        assert DEFAULT_CONFIG.level_pitch == 220
        assert DEFAULT_CONFIG.row_pitch == 100
        assert DEFAULT_CONFIG.margin == 40

    def test_zoom_bounds(self):
        assert (DEFAULT_CONFIG.min_scale, DEFAULT_CONFIG.max_scale) == (0.5, 2.0)
        assert DEFAULT_CONFIG.zoom_step == 1.2


class TestLoadConfig:
    def test_no_overrides(self):
        assert load_config(env={}) == DiagramConfig()

    def test_overrides(self):
        config = load_config(
            env={
                "WORKFLOW_DIAGRAM_GRID_UNIT": "10",
                "WORKFLOW_DIAGRAM_ZOOM_ENABLED": "false",
                "WORKFLOW_DIAGRAM_DRAG_THRESHOLD": "2.5",
                "WORKFLOW_DIAGRAM_GESTURE": "drag_handle",
                "UNRELATED": "x",
            }
        )
        assert config.grid_unit == 10
        assert config.zoom_enabled is False
        assert config.drag_threshold == 2.5
        assert config.gesture is GesturePolicy.DRAG_HANDLE
        assert config.box_width == DEFAULT_CONFIG.box_width

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="WORKFLOW_DIAGRAM_GRID_UNIT"):
            load_config(env={"WORKFLOW_DIAGRAM_GRID_UNIT": "wide"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("WORKFLOW_DIAGRAM_STRICT_DEPENDENCIES", "yes")
        assert load_config().strict_dependencies is True

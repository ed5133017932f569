"""
Unit tests for TimeServiceManager.
"""

import pytest
from engine.managers.time_controller import TimeController
from engine.managers.time_service_manager import TimeServiceManager
from systems.time_effects import EffectRegistry
from world.level import SimLevel
from world.time.time_value import TimeValue


@pytest.fixture
def manager(simple_config):
    return TimeServiceManager(simple_config)


class TestLevelLifecycle:
    """Tests for level load/unload callbacks."""

    def test_load_creates_controller(self, manager, level):
        """Test that loading a level creates its controller."""
        controller = manager.on_level_load(level)
        assert isinstance(controller, TimeController)
        assert manager.get("overworld") is controller
        assert manager.has_controller("overworld") is True

    def test_unload_removes_controller(self, manager, level):
        """Test that unloading drops the controller."""
        manager.on_level_load(level)
        manager.on_level_unload(level)
        assert manager.get("overworld") is None

    def test_reload_replaces_controller(self, manager, level):
        """Test that only one controller exists per level id."""
        first = manager.on_level_load(level)
        second = manager.on_level_load(level)
        assert first is not second
        assert manager.get("overworld") is second
        assert len(manager.controllers) == 1

    def test_excluded_level(self, simple_config, level):
        """Test that excluded levels get no controller."""
        simple_config.excluded_level_ids = {"overworld"}
        manager = TimeServiceManager(simple_config)
        assert manager.on_level_load(level) is None
        assert manager.get("overworld") is None

    def test_derived_level_attaches_to_parent(self, manager, level):
        """Test that a derived level is managed by its parent's controller."""
        controller = manager.on_level_load(level)
        nether = SimLevel("nether", parent_id="overworld")

        assert manager.on_level_load(nether) is None
        assert manager.get("nether") is None
        assert controller.manages_level("nether") is True

        manager.on_level_unload(nether)
        assert controller.manages_level("nether") is False
        assert manager.get("overworld") is controller

    def test_derived_level_loaded_before_parent(self, manager, level):
        """Test that the parent picks up derived levels that loaded first."""
        manager.on_level_load(SimLevel("nether", parent_id="overworld"))
        controller = manager.on_level_load(level)
        assert controller.manages_level("nether") is True

    def test_shared_effect_registry(self, simple_config, level):
        """Test that controllers use the manager's effect registry."""
        effects = EffectRegistry()
        manager = TimeServiceManager(simple_config, effects=effects)
        assert manager.on_level_load(level).effects is effects


class TestHostCallbacks:
    """Tests for tick and participant callbacks."""

    def test_level_tick(self, manager, level):
        """Test that a level tick advances the level's time."""
        level.set_day_time(300)
        manager.on_level_load(level)

        manager.on_level_tick("overworld")
        level.tick()

        assert manager.get("overworld").get_day_time() == TimeValue(301)

    def test_sleep_and_wake_events(self, manager, level):
        """Test that sleep events reach the level's sleep status."""
        manager.on_level_load(level)
        manager.on_participants_changed("overworld", 2)

        manager.on_sleep("overworld", "alice")
        assert manager.get("overworld").sleep_status.ratio() == 0.5

        manager.on_wake("overworld", "alice")
        assert manager.get("overworld").sleep_status.all_awake() is True

    def test_unknown_level_is_ignored(self, manager):
        """Test that callbacks for unmanaged levels do nothing."""
        manager.on_level_tick("missing")
        manager.on_participants_changed("missing", 3)
        manager.on_sleep("missing", "alice")
        manager.on_wake("missing", "alice")
        manager.on_level_unload(SimLevel("missing"))
        assert manager.controllers == {}

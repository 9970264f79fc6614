"""Tests for the game engine and its systems."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from powerkids.assets import build_sprite_sheet
from powerkids.config import GameConfig
from powerkids.engine import CharacterAnimator, CharacterPhysics, GameEngine, Goal
from powerkids.engine.systems import facing_for, random_nice_color
from powerkids.errors import MissingAnimationError
from powerkids.types import Direction, FrameRange, Rect, Vec, ZERO

from conftest import CHARACTER_FRAME, make_grid_image


class TestFacing:
    """Tests for the facing direction precedence."""

    @pytest.mark.parametrize(
        "velocity,expected",
        [
            (Vec(1, 1), Direction.EAST),
            (Vec(1, -1), Direction.EAST),
            (Vec(-1, 1), Direction.WEST),
            (Vec(-1, -1), Direction.WEST),
            (Vec(0, -1), Direction.SOUTH),
            (Vec(0, 1), Direction.NORTH),
        ],
    )
    def test_precedence(self, velocity, expected):
        """Test horizontal movement wins over vertical."""
        assert facing_for(velocity, Direction.SOUTH) == expected

    @pytest.mark.parametrize("current", list(Direction))
    def test_zero_velocity_keeps_facing(self, current):
        """Test standing still keeps the current facing."""
        assert facing_for(ZERO, current) == current


class TestCharacterPhysics:
    """Tests for CharacterPhysics."""

    def test_initial_state(self):
        """Test the character starts centred on the origin facing south."""
        phys = CharacterPhysics()
        assert phys.rect == Rect(-32, -32, 32, 32)
        assert phys.position == ZERO
        assert phys.velocity == ZERO
        assert phys.facing == Direction.SOUTH

    def test_control_is_per_tick_displacement(self):
        """Test the control vector is added as-is, regardless of dt."""
        phys = CharacterPhysics()
        phys.update(0.5, Vec(1, 0))
        phys.update(0.001, Vec(1, 0))
        assert phys.position == Vec(2, 0)
        assert phys.velocity == Vec(1, 0)

    def test_velocity_replaced_each_tick(self):
        """Test velocity is the latest control vector, not accumulated."""
        phys = CharacterPhysics()
        phys.update(0.1, Vec(3, 0))
        phys.update(0.1, Vec(0, -1))
        assert phys.velocity == Vec(0, -1)
        assert phys.facing == Direction.SOUTH

    def test_stopping_keeps_facing(self):
        """Test releasing the keys keeps the last facing."""
        phys = CharacterPhysics()
        phys.update(0.1, Vec(0, 1))
        phys.update(0.1, ZERO)
        assert phys.facing == Direction.NORTH

    def test_restart(self):
        """Test restart returns to the origin and stops."""
        phys = CharacterPhysics()
        phys.update(0.1, Vec(-5, 7))
        phys.restart()
        assert phys.position == ZERO
        assert phys.rect.width == 64
        assert phys.velocity == ZERO
        assert phys.facing == Direction.SOUTH


class TestCharacterAnimator:
    """Tests for CharacterAnimator."""

    def test_initial_state(self, character_sheet):
        """Test the animator starts south with a zero counter."""
        anim = CharacterAnimator(character_sheet)
        assert anim.state == Direction.SOUTH
        assert anim.counter == 0
        assert anim.frame == character_sheet.first_frame("South")

    def test_switch_resets_counter(self, character_sheet):
        """Test a state change resets the counter to exactly zero."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        anim.update(0.3, phys)
        assert anim.counter == pytest.approx(0.3)

        phys.update(0.1, Vec(1, 0))
        anim.update(0.1, phys)
        assert anim.state == Direction.EAST
        assert anim.counter == 0
        assert anim.frame == character_sheet.first_frame("East")

    def test_switch_logged_at_debug(self, character_sheet, caplog):
        """Test a state switch and the newly selected frame are logged."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        phys.update(0.1, Vec(1, 0))
        with caplog.at_level(logging.DEBUG, logger="powerkids.engine.systems.animation"):
            anim.update(0.1, phys)

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert "animation state South -> East" in messages
        assert f"frame {character_sheet.first_frame('East')}" in messages

    def test_no_log_without_switch(self, character_sheet, caplog):
        """Test a steady state logs nothing."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        with caplog.at_level(logging.DEBUG, logger="powerkids.engine.systems.animation"):
            anim.update(0.1, phys)
        assert caplog.records == []

    def test_counter_increases_without_switch(self, character_sheet):
        """Test the counter strictly increases while the state holds."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        previous = anim.counter
        for _ in range(5):
            phys.update(0.016, Vec(0, -1))
            anim.update(0.016, phys)
            assert anim.state == Direction.SOUTH
            assert anim.counter > previous
            previous = anim.counter

    def test_zero_velocity_no_transition(self, character_sheet):
        """Test standing still neither switches nor resets."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        phys.update(0.1, Vec(-1, 0))
        anim.update(0.1, phys)
        phys.update(0.1, ZERO)
        anim.update(0.1, phys)
        assert anim.state == Direction.WEST
        assert anim.counter == pytest.approx(0.1)

    def test_static_pose_by_default(self, character_sheet):
        """Test only frame 0 is shown without cycling."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        for _ in range(20):
            anim.update(0.05, phys)
            assert anim.frame == character_sheet.first_frame("South")

    def test_cycle_frames(self, character_sheet):
        """Test cycling advances one frame per rate and wraps."""
        anim = CharacterAnimator(character_sheet, rate=0.1, cycle_frames=True)
        phys = CharacterPhysics()
        south = character_sheet.frames("South")

        anim.update(0.15, phys)
        assert anim.frame == south[1]
        anim.update(0.1, phys)
        assert anim.frame == south[2]
        anim.update(0.1, phys)
        assert anim.frame == south[0]

    def test_cycle_restarts_on_switch(self, character_sheet):
        """Test a new direction starts from its first frame."""
        anim = CharacterAnimator(character_sheet, rate=0.1, cycle_frames=True)
        phys = CharacterPhysics()
        anim.update(0.25, phys)
        phys.update(0.1, Vec(0, 1))
        anim.update(0.1, phys)
        assert anim.frame == character_sheet.first_frame("North")

    def test_reset(self, character_sheet):
        """Test reset returns to south with a zero counter."""
        anim = CharacterAnimator(character_sheet)
        phys = CharacterPhysics()
        phys.update(0.1, Vec(0, 1))
        anim.update(0.1, phys)
        anim.reset()
        assert anim.state == Direction.SOUTH
        assert anim.counter == 0
        assert anim.frame == character_sheet.first_frame("South")

    def test_missing_direction_raises(self):
        """Test a sheet without all four directions is rejected."""
        sheet = build_sprite_sheet(
            make_grid_image(2, 2, CHARACTER_FRAME),
            CHARACTER_FRAME,
            [FrameRange("South", 0, 0, 1), FrameRange("East", 1, 0, 1)],
        )
        with pytest.raises(MissingAnimationError, match="West, North"):
            CharacterAnimator(sheet)

    def test_invalid_rate(self, character_sheet):
        """Test cycling needs a positive rate."""
        with pytest.raises(ValueError):
            CharacterAnimator(character_sheet, rate=0, cycle_frames=True)


class FixedRng:
    """Generator stand-in returning queued samples."""

    def __init__(self, samples):
        self._samples = [np.asarray(s, dtype=float) for s in samples]
        self.calls = 0

    def random(self, size):
        self.calls += 1
        return self._samples.pop(0)


class TestRandomNiceColor:
    """Tests for random color sampling."""

    def test_unit_norm_and_never_zero(self):
        """Test many samples all have norm 1."""
        rng = np.random.default_rng(1234)
        for _ in range(2000):
            color = random_nice_color(rng)
            assert len(color) == 3
            assert math.isclose(math.sqrt(sum(c * c for c in color)), 1.0, rel_tol=1e-9)
            assert all(0 <= c <= 1 for c in color)

    def test_zero_sample_is_redrawn(self):
        """Test a zero vector is rejected and sampled again."""
        rng = FixedRng([(0, 0, 0), (0, 3, 4)])
        assert random_nice_color(rng) == pytest.approx((0, 0.6, 0.8))
        assert rng.calls == 2

    def test_gives_up_after_max_attempts(self):
        """Test the retry loop is bounded."""
        rng = FixedRng([(0, 0, 0)] * 3)
        with pytest.raises(RuntimeError):
            random_nice_color(rng, max_attempts=3)


class TestGoal:
    """Tests for the goal marker."""

    def test_starts_with_five_colors(self):
        """Test the ring holds five colors."""
        goal = Goal(ZERO, rng=np.random.default_rng(0))
        assert len(goal.colors) == 5

    def test_shift_every_step(self):
        """Test a new color enters at the front each step."""
        goal = Goal(ZERO, step=0.1, rng=np.random.default_rng(0))
        before = list(goal.colors)
        goal.update(0.25)
        after = list(goal.colors)
        assert len(after) == 5
        assert after[2:] == before[:3]
        assert goal.counter == pytest.approx(0.05)

    def test_no_shift_before_step(self):
        """Test colors hold until a full step has passed."""
        goal = Goal(ZERO, step=0.1, rng=np.random.default_rng(0))
        before = list(goal.colors)
        goal.update(0.05)
        assert list(goal.colors) == before

    def test_rings_outermost_first(self):
        """Test ring radii shrink towards the centre."""
        goal = Goal(ZERO, radius=10, rng=np.random.default_rng(0))
        rings = goal.rings()
        assert [r for r, _ in rings] == pytest.approx([10, 8, 6, 4, 2])
        assert rings[-1][1] == goal.colors[0]

    def test_invalid_step(self):
        """Test the step must be positive."""
        with pytest.raises(ValueError):
            Goal(ZERO, step=0)


class TestGameEngine:
    """Tests for GameEngine."""

    def test_update_moves_and_animates(self, character_sheet):
        """Test one tick moves the character and updates its frame."""
        engine = GameEngine(character_sheet)
        engine.update(0.016, Vec(-1, 0))
        assert engine.character_position == Vec(-1, 0)
        assert engine.character_frame == character_sheet.first_frame("West")

    def test_character_size_follows_frame(self, character_sheet):
        """Test the character bounds match the sheet frame size."""
        engine = GameEngine(character_sheet)
        assert engine.physics.rect.width == CHARACTER_FRAME

    def test_restart(self, character_sheet):
        """Test restart resets physics and animation."""
        engine = GameEngine(character_sheet)
        engine.update(0.016, Vec(0, 1))
        engine.restart()
        assert engine.character_position == ZERO
        assert engine.animator.state == Direction.SOUTH

    def test_goal_disabled_by_default(self, character_sheet):
        """Test no goal without configuration."""
        assert GameEngine(character_sheet).goal is None

    def test_goal_enabled(self, character_sheet):
        """Test the goal is created and advanced when configured."""
        config = GameConfig(goal_enabled=True, goal_position=(40, 10), goal_step=0.1, seed=7)
        engine = GameEngine(character_sheet, config=config)
        assert engine.goal.position == Vec(40, 10)
        engine.update(0.05, ZERO)
        assert engine.goal.counter == pytest.approx(0.05)

"""
Unit tests for the acoustic metrics model.

Tests verify:
- Speed of sound and wavelength formulas
- Classification boundaries (1.0 and 0.5 are both transitional)
- Purity of compute_metrics
- Behavior for out-of-domain input (no exceptions)
- Parameter validation and ParameterState
"""

import math
import warnings

import numpy as np
import pytest

from acoustic_flow import (
    Behavior,
    ParameterState,
    SimulationParameters,
    classify,
    compute_metrics,
    speed_of_sound,
    validate_parameters,
)

# =============================================================================
# Formulas
# =============================================================================


class TestSpeedOfSound:
    @pytest.mark.parametrize("temperature", [-20.0, -5.5, 0.0, 20.0, 37.3, 40.0])
    def test_linear_formula_exact(self, temperature):
        """Speed is exactly 331.4 + 0.6 * T."""
        assert speed_of_sound(temperature) == 331.4 + 0.6 * temperature

    def test_metrics_use_formula(self):
        metrics = compute_metrics(SimulationParameters(temperature_c=-10.0))
        assert metrics.speed_of_sound_mps == 331.4 + 0.6 * -10.0


class TestWavelength:
    def test_wavelength_formula(self):
        for frequency in [50.0, 343.0, 1000.0, 2000.0]:
            metrics = compute_metrics(SimulationParameters(frequency_hz=frequency))
            assert metrics.wavelength_m == metrics.speed_of_sound_mps / frequency

    def test_strictly_decreasing_in_frequency(self):
        frequencies = np.linspace(50, 2000, 200)
        wavelengths = [
            compute_metrics(SimulationParameters(frequency_hz=float(f))).wavelength_m
            for f in frequencies
        ]
        assert np.all(np.diff(wavelengths) < 0)

    def test_size_ratio(self):
        metrics = compute_metrics(SimulationParameters(frequency_hz=500.0, obstacle_size_m=2.0))
        assert metrics.size_ratio == pytest.approx(2.0 / metrics.wavelength_m)


# =============================================================================
# Classification
# =============================================================================


class TestClassify:
    def test_ratio_exactly_one_is_transitional(self):
        assert classify(1.0) is Behavior.TRANSITIONAL

    def test_ratio_exactly_half_is_transitional(self):
        assert classify(0.5) is Behavior.TRANSITIONAL

    def test_just_above_one_is_reflecting(self):
        assert classify(np.nextafter(1.0, 2.0)) is Behavior.REFLECTING

    def test_just_below_half_is_diffracting(self):
        assert classify(np.nextafter(0.5, 0.0)) is Behavior.DIFFRACTING

    def test_negative_ratio_is_diffracting(self):
        assert classify(-3.0) is Behavior.DIFFRACTING

    def test_behavior_text(self):
        assert Behavior.REFLECTING.label == "Reflection"
        assert "shadow" in Behavior.REFLECTING.description
        assert Behavior.DIFFRACTING.label == "Diffraction"
        assert Behavior.TRANSITIONAL.label == "Transition"


class TestExamples:
    def test_343hz_at_20c(self):
        """343 Hz at 20 °C gives a wavelength of about one meter."""
        metrics = compute_metrics(SimulationParameters(frequency_hz=343.0, temperature_c=20.0))
        assert metrics.speed_of_sound_mps == pytest.approx(343.4)
        assert metrics.wavelength_m == pytest.approx(1.0012, abs=1e-4)

    def test_one_meter_obstacle_is_transitional(self):
        metrics = compute_metrics(
            SimulationParameters(frequency_hz=343.0, obstacle_size_m=1.0, temperature_c=20.0)
        )
        assert metrics.size_ratio == pytest.approx(0.999, abs=1e-3)
        assert metrics.behavior is Behavior.TRANSITIONAL

    def test_high_frequency_large_obstacle_reflects(self):
        metrics = compute_metrics(
            SimulationParameters(frequency_hz=2000.0, obstacle_size_m=5.0, temperature_c=20.0)
        )
        assert metrics.size_ratio > 20
        assert metrics.behavior is Behavior.REFLECTING

    def test_low_frequency_small_obstacle_diffracts(self):
        metrics = compute_metrics(
            SimulationParameters(frequency_hz=50.0, obstacle_size_m=0.1, temperature_c=20.0)
        )
        assert metrics.size_ratio < 0.05
        assert metrics.behavior is Behavior.DIFFRACTING


class TestPurity:
    def test_identical_inputs_identical_outputs(self):
        params = SimulationParameters(frequency_hz=777.7, obstacle_size_m=0.33, temperature_c=3.1)
        assert compute_metrics(params) == compute_metrics(params)

    def test_zero_frequency_does_not_raise(self):
        """Zero frequency yields an infinite wavelength and a zero ratio."""
        metrics = compute_metrics(SimulationParameters(frequency_hz=0.0))
        assert math.isinf(metrics.wavelength_m)
        assert metrics.size_ratio == 0.0
        assert metrics.behavior is Behavior.DIFFRACTING

    def test_negative_frequency_is_well_defined(self):
        metrics = compute_metrics(SimulationParameters(frequency_hz=-343.0))
        assert metrics.wavelength_m < 0
        assert metrics.behavior is Behavior.DIFFRACTING


# =============================================================================
# Validation and state
# =============================================================================


class TestValidation:
    def test_valid_parameters_pass_silently(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            params = SimulationParameters()
            assert validate_parameters(params) is params

    @pytest.mark.parametrize(
        "changes",
        [
            {"frequency_hz": 0.0},
            {"frequency_hz": -10.0},
            {"obstacle_size_m": 0.0},
            {"temperature_c": math.nan},
            {"frequency_hz": math.inf},
        ],
    )
    def test_invalid_parameters_raise(self, changes):
        with pytest.raises(ValueError):
            validate_parameters(SimulationParameters().with_changes(**changes))

    def test_out_of_range_warns(self):
        with pytest.warns(UserWarning, match="recommended range") as record:
            validate_parameters(SimulationParameters(frequency_hz=20000.0))

        assert record[0].filename.endswith("test_metrics.py")


class TestParameterState:
    def test_default_state(self):
        state = ParameterState()
        assert state.params == SimulationParameters()
        assert state.metrics == compute_metrics(SimulationParameters())

    def test_update_recomputes_metrics(self):
        state = ParameterState()
        snapshot = state.update(frequency_hz=2000.0, obstacle_size_m=5.0)

        assert snapshot.metrics.behavior is Behavior.REFLECTING
        assert state() is snapshot
        assert state.metrics == compute_metrics(state.params)

    def test_invalid_update_keeps_previous_state(self):
        state = ParameterState()
        before = state()

        with pytest.raises(ValueError):
            state.update(frequency_hz=0.0)

        assert state() is before

    def test_update_warning_points_at_caller(self):
        state = ParameterState()

        with pytest.warns(UserWarning, match="recommended range") as record:
            state.update(frequency_hz=20000.0)

        assert record[0].filename.endswith("test_metrics.py")

    def test_init_warning_points_at_caller(self):
        with pytest.warns(UserWarning, match="recommended range") as record:
            ParameterState(SimulationParameters(temperature_c=80.0))

        assert record[0].filename.endswith("test_metrics.py")

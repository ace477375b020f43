"""Tests for the read-only scene summary and explanation prompt."""

import json

from acoustic_flow import ParameterState, explanation_prompt, scene_summary


class TestSceneSummary:
    def test_contains_inputs_and_metrics(self):
        state = ParameterState()
        summary = scene_summary(state.params, state.metrics)

        assert summary["frequency_hz"] == 343.0
        assert summary["obstacle_size_m"] == 1.0
        assert summary["temperature_c"] == 20.0
        assert summary["speed_of_sound_mps"] == state.metrics.speed_of_sound_mps
        assert summary["wavelength_m"] == state.metrics.wavelength_m
        assert summary["size_ratio"] == state.metrics.size_ratio
        assert summary["behavior"] == "transitional"

    def test_json_serializable(self):
        state = ParameterState()
        decoded = json.loads(json.dumps(scene_summary(state.params, state.metrics)))
        assert decoded["behavior"] == "transitional"


class TestExplanationPrompt:
    def test_interpolates_metrics(self):
        state = ParameterState()
        state.update(frequency_hz=1000.0, obstacle_size_m=2.5)
        prompt = explanation_prompt(state.params, state.metrics)

        assert "1000 Hz" in prompt
        assert f"{state.metrics.wavelength_m:.2f} meters" in prompt
        assert "2.50 meters" in prompt
        assert f"is {state.metrics.size_ratio:.2f}." in prompt
        assert "under 150 words" in prompt

"""
Tests for system prompt construction and risk tier rules.
"""
from datetime import datetime, timezone

import pytest

from app.core.models.risk_tiers import (
    ACTIVITY_RULES,
    RiskTier,
    get_activity_rule,
    is_high_risk,
    normalize_risk_tier,
)
from app.core.services.prompt_service import build_system_prompt, melbourne_time_of_day
from app.schemas.chat import PollenScenario


def scenario_with(**overrides):
    data = {
        "name": "Test Day",
        "date": "November 1, 2024",
        "grassPollen": 30,
        "windSpeed": 10,
        "windDirection": "North",
        "temperature": 24,
        "humidity": 55,
        "riskLevel": "Moderate",
        "conditions": "Mild breeze",
        "confidence": "Moderate",
    }
    data.update(overrides)
    return PollenScenario(**data)


class TestRiskTierNormalization:

    @pytest.mark.parametrize("raw, tier", [
        ("Low", RiskTier.LOW),
        ("MODERATE", RiskTier.MODERATE),
        ("high", RiskTier.HIGH),
        ("Very High", RiskTier.VERY_HIGH),
        ("very-high", RiskTier.VERY_HIGH),
        ("Extreme", RiskTier.EXTREME),
    ])
    def test_known_levels(self, raw, tier):
        assert normalize_risk_tier(raw) == tier

    def test_unknown_level_defaults_to_moderate(self):
        assert normalize_risk_tier("Catastrophic") == RiskTier.MODERATE
        assert normalize_risk_tier("") == RiskTier.MODERATE

    def test_extreme_has_no_safe_window(self):
        rule = get_activity_rule("Extreme")
        assert rule.safe_windows == ()
        assert rule.avoid_times == ("all day",)
        assert rule.window_open_guidance == "never"

    def test_every_other_tier_has_a_safe_window(self):
        for tier, rule in ACTIVITY_RULES.items():
            if tier is not RiskTier.EXTREME:
                assert rule.has_safe_window

    def test_high_risk_split_is_plain_membership(self):
        assert is_high_risk("Very High")
        assert is_high_risk("EXTREME")
        assert not is_high_risk("Moderate")
        # Normalises to VERY_HIGH for rules, but is not a high-risk label
        assert not is_high_risk("very-high")


class TestBuildSystemPrompt:

    @pytest.mark.parametrize("risk_level", ["Low", "Moderate", "High", "Very High", "Extreme", "Unknown"])
    def test_classification_thresholds_always_present(self, risk_level):
        prompt = build_system_prompt(scenario_with(riskLevel=risk_level), "General", "09:00")
        for threshold in ("0-19", "20-49", "50-99", "100"):
            assert threshold in prompt

    def test_readings_and_persona(self):
        scenario = scenario_with(grassPollen=85, windSpeed=24, temperature=29, humidity=42,
                                 riskLevel="Very High", date="November 6, 2024")
        prompt = build_system_prompt(scenario, "Morning Check-in", "07:15")

        assert "You are PollenPilot" in prompt
        assert "CURRENT TIME: 07:15" in prompt
        assert "Grass pollen: 85 grains/m³ (Very High)" in prompt
        assert "Wind: 24km/h North" in prompt
        assert "Temperature: 29°C, Humidity: 42%" in prompt
        assert "Date: November 6, 2024" in prompt

    def test_science_block_and_response_rules(self):
        prompt = build_system_prompt(scenario_with(), "General", "12:00")

        assert "PRIMARY PEAK: 5am-10am" in prompt
        assert "SECONDARY PEAK: 6pm-9pm" in prompt
        assert "LOWEST LEVELS: 10pm-5am" in prompt
        assert "Thunderstorm asthma" in prompt
        assert "Maximum 40 words total" in prompt
        assert "NO asterisks, bullets, or formatting" in prompt
        assert "Always provide indoor alternative" in prompt

    def test_very_high_rule_rendering(self):
        prompt = build_system_prompt(scenario_with(riskLevel="Very High"), "Activity Planning", "12:00")

        assert "- Safe windows: 23:00-05:00" in prompt
        assert "- AVOID: 05:00-23:00" in prompt
        assert "Running/Exercise: Safe during: 23:00-05:00" in prompt
        assert "Window opening: Safe after 23:00" in prompt

    def test_low_rule_uses_first_and_last_window(self):
        prompt = build_system_prompt(scenario_with(riskLevel="Low"), "Activity Planning", "12:00")

        assert "- Safe windows: 06:00-09:00 and 18:00-06:00" in prompt
        assert "Running/Exercise: Safe during: 06:00-09:00" in prompt
        assert "Picnics/Outdoor dining: Plan for: 18:00-06:00" in prompt

    def test_extreme_renders_no_safe_times(self):
        prompt = build_system_prompt(scenario_with(riskLevel="Extreme"), "General", "12:00")

        assert "NO SAFE TIMES - stay indoors" in prompt
        assert "Safe windows:" not in prompt
        assert "Indoor gym only" in prompt
        assert "Indoor venues only" in prompt
        assert "Keep closed - use air conditioning" in prompt
        assert "Minimize exposure - mask recommended" in prompt

    def test_unknown_risk_uses_moderate_rule(self):
        prompt = build_system_prompt(scenario_with(riskLevel="Off the charts"), "General", "12:00")
        assert "- Safe windows: 06:00-08:00 and 20:00-06:00" in prompt

    def test_humidity_notes(self):
        humid = build_system_prompt(scenario_with(humidity=75), "General", "12:00")
        dry = build_system_prompt(scenario_with(humidity=35), "General", "12:00")
        mild = build_system_prompt(scenario_with(humidity=55), "General", "12:00")

        assert "keeps pollen grounded - conditions better than expected" in humid
        assert "airborne longer - extra caution needed" not in humid
        assert "keeps pollen airborne longer - extra caution needed" in dry
        assert "better than expected" not in dry
        assert "better than expected" not in mild
        assert "extra caution needed" not in mild

    def test_humidity_boundaries(self):
        assert "better than expected" in build_system_prompt(scenario_with(humidity=70), "General", "12:00")
        assert "extra caution needed" in build_system_prompt(scenario_with(humidity=40), "General", "12:00")

    def test_deterministic(self):
        scenario = scenario_with()
        assert build_system_prompt(scenario, "General", "10:00") == build_system_prompt(scenario, "General", "10:00")

    def test_unknown_flow_gets_generic_focus(self):
        prompt = build_system_prompt(scenario_with(), "Gardening", "10:00")
        assert "Current flow: Gardening - AI-powered hayfever management for Melbourne residents" in prompt

    def test_known_flow_gets_its_focus(self):
        prompt = build_system_prompt(scenario_with(), "Bad Day Recovery", "10:00")
        assert "Immediate relief strategies" in prompt


class TestMelbourneTimeOfDay:

    def test_daylight_saving(self):
        assert melbourne_time_of_day(datetime(2024, 11, 5, 21, 30, tzinfo=timezone.utc)) == "08:30"

    def test_standard_time(self):
        assert melbourne_time_of_day(datetime(2024, 7, 1, 0, 5, tzinfo=timezone.utc)) == "10:05"

    def test_naive_input_is_utc(self):
        assert melbourne_time_of_day(datetime(2024, 7, 1, 14, 0)) == "00:00"

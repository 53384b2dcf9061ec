"""
Tests for the template-based demo responder.
"""
import pytest

from app.core.services.fallback_service import generate_demo_response


def bullet_count(text):
    return sum(1 for line in text.splitlines() if line.startswith("• "))


class TestMorningCheckIn:

    def test_very_high_lists_immediate_actions(self, scenarios):
        scenario = scenarios["Very High"]
        reply = generate_demo_response("Morning!", scenario, "Morning Check-in")

        assert str(scenario.grass_pollen) in reply
        assert "Immediate actions" in reply
        assert bullet_count(reply) >= 3
        assert "north winds at 24km/h" in reply

    def test_low_lists_opportunities(self, scenarios):
        reply = generate_demo_response("Morning!", scenarios["Low"], "Morning Check-in")

        assert "Great news" in reply
        assert "low pollen levels" in reply
        assert bullet_count(reply) == 4

    def test_moderate_counts_as_low_risk(self, scenarios):
        reply = generate_demo_response("hi", scenarios["Moderate"], "Morning Check-in")
        assert "Today's opportunities" in reply


class TestActivityPlanning:

    def test_run_on_low_day_is_encouraged_with_window(self, scenarios):
        reply = generate_demo_response("Can I go for a run?", scenarios["Low"], "Activity Planning")

        assert "Perfect timing for a run!" in reply
        assert "6-8am" in reply
        assert "4-6pm" in reply

    def test_exercise_on_extreme_day_is_discouraged(self, scenarios):
        reply = generate_demo_response("Any EXERCISE ideas?", scenarios["Extreme"], "Activity Planning")

        assert "strongly advise against" in reply
        assert "Indoor gym or treadmill" in reply
        assert "72 grains/m³" in reply

    def test_other_activity_falls_through_to_generic(self, scenarios):
        reply = generate_demo_response("Picnic at the park?", scenarios["Low"], "Activity Planning")

        assert reply.startswith('Thanks for your question about "Picnic at the park?"')
        assert "low pollen conditions" in reply


class TestBadDayRecovery:

    @pytest.mark.parametrize("risk_level", ["Low", "Moderate", "Very High", "Extreme"])
    def test_always_relief_and_reassurance(self, scenarios, risk_level):
        reply = generate_demo_response("Should I run?", scenarios[risk_level], "Bad Day Recovery")

        assert "Immediate relief" in reply
        assert "Saline nasal rinse" in reply
        assert "relief should come with tonight's southerly change" in reply
        assert "You're not alone" in reply


class TestGeneric:

    def test_unknown_flow_echoes_message(self, scenarios):
        scenario = scenarios["Very High"]
        reply = generate_demo_response("Is it safe to mow?", scenario, "Gardening")

        assert '"Is it safe to mow?"' in reply
        assert "very high pollen conditions" in reply
        assert "85 grains/m³" in reply
        assert "Would you like specific advice" in reply

    def test_deterministic(self, scenarios):
        scenario = scenarios["Moderate"]
        first = generate_demo_response("hello", scenario, "General")
        assert first == generate_demo_response("hello", scenario, "General")
        assert first

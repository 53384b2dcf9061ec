import logging
from typing import Dict, Any, List, Optional

from app.core.models.risk_tiers import get_risk_color, is_high_risk
from app.schemas.chat import Flow, PollenScenario

logger = logging.getLogger(__name__)


class ScenarioCatalog:
    """
    Canonical Melbourne pollen scenarios used by the demo.
    Scenarios are static configuration and are never mutated.
    """

    SCENARIOS = [
        PollenScenario(
            name="Classic Bad Day - Melbourne Cup Day",
            date="November 6, 2024",
            grass_pollen=85,
            wind_speed=24,
            wind_direction="North",
            temperature=29,
            humidity=42,
            risk_level="Very High",
            conditions="Hot northerly winds bringing pollen from countryside",
            confidence="High - matches historical Cup Day patterns",
        ),
        PollenScenario(
            name="Deceptive Calm",
            date="October 15, 2024",
            grass_pollen=45,
            wind_speed=6,
            wind_direction="Variable",
            temperature=22,
            humidity=68,
            risk_level="Moderate",
            conditions="Still air, moderate pollen - easy to underestimate",
            confidence="Moderate - pollen can vary in calm conditions",
        ),
        PollenScenario(
            name="Thunderstorm Asthma Risk",
            date="November 18, 2024",
            grass_pollen=72,
            wind_speed=18,
            wind_direction="Changing",
            temperature=26,
            humidity=85,
            risk_level="Extreme",
            conditions="Thunderstorm approaching with high pollen - dangerous combination",
            confidence="High - enhanced forecasting system active since 2017",
        ),
        PollenScenario(
            name="Southerly Relief",
            date="November 12, 2024",
            grass_pollen=15,
            wind_speed=12,
            wind_direction="South",
            temperature=19,
            humidity=58,
            risk_level="Low",
            conditions="Cool southerly winds from ocean clearing the air",
            confidence="High - southerlies consistently bring relief",
        ),
    ]

    FLOW_DESCRIPTIONS = {
        Flow.MORNING_CHECK_IN.value: "Start your day with current risk levels and proactive recommendations",
        Flow.ACTIVITY_PLANNING.value: "Get specific timing advice for outdoor activities and alternatives",
        Flow.BAD_DAY_RECOVERY.value: "Immediate relief strategies and validation during symptom flare-ups",
    }
    DEFAULT_FLOW_DESCRIPTION = "AI-powered hayfever management for Melbourne residents"

    HIGH_RISK_RECOMMENDATIONS = [
        "Take antihistamine now (before symptoms start)",
        "Use nasal spray - preventative dose",
        "Avoid outdoor activities 5am-10am (peak release)",
    ]
    LOW_RISK_RECOMMENDATIONS = [
        "Good conditions for outdoor activities",
        "Safe to open windows for fresh air",
        "Monitor for any wind changes",
    ]

    def list_scenarios(self) -> List[Dict[str, Any]]:
        """Get every scenario with its display metadata."""
        return [self.describe(scenario) for scenario in self.SCENARIOS]

    def get_scenario(self, name: str) -> Optional[PollenScenario]:
        """
        Look up a scenario by name (case-insensitive).

        Args:
            name (str): Scenario name

        Returns:
            Optional[PollenScenario]: The scenario, or None if unknown
        """
        wanted = name.strip().lower()
        for scenario in self.SCENARIOS:
            if scenario.name.lower() == wanted:
                return scenario
        logger.info(f"Scenario not found: {name}")
        return None

    def describe(self, scenario: PollenScenario) -> Dict[str, Any]:
        """Serialise a scenario together with its colour and wind note."""
        data = scenario.model_dump(by_alias=True)
        data["riskColor"] = get_risk_color(scenario.risk_level)
        data["windNote"] = self.wind_note(scenario.wind_direction)
        return data

    def list_flows(self) -> List[Dict[str, str]]:
        """Get the available conversation flows and their descriptions."""
        return [
            {"flow": flow.value, "description": self.flow_description(flow.value)}
            for flow in Flow
        ]

    @classmethod
    def flow_description(cls, flow: str) -> str:
        return cls.FLOW_DESCRIPTIONS.get(flow, cls.DEFAULT_FLOW_DESCRIPTION)

    @staticmethod
    def wind_note(wind_direction: str) -> str:
        """Explain what the wind direction means for pollen exposure."""
        direction = wind_direction.lower()
        if direction in ("north", "northerly"):
            return ("Northerly winds bringing grass pollen from countryside areas. "
                    "Expect conditions to persist until evening southerly change.")
        if direction in ("south", "southerly"):
            return "Southerly winds bringing clean ocean air. Good conditions for sensitive individuals."
        return "Variable wind conditions. Monitor for changes throughout the day."

    def get_recommendations(self, scenario: PollenScenario) -> Dict[str, Any]:
        """
        Build the proactive recommendation card for a scenario.

        Args:
            scenario (PollenScenario): Scenario to advise on

        Returns:
            Dict[str, Any]: Card title, colour, items and Melbourne context
        """
        high_risk = is_high_risk(scenario.risk_level)
        return {
            "scenario": scenario.name,
            "riskLevel": scenario.risk_level,
            "riskColor": get_risk_color(scenario.risk_level),
            "highRisk": high_risk,
            "title": "Immediate Protection" if high_risk else "Good Conditions",
            "recommendations": list(
                self.HIGH_RISK_RECOMMENDATIONS if high_risk else self.LOW_RISK_RECOMMENDATIONS
            ),
            "melbourneConditions": {
                "wind": f"{scenario.wind_speed}km/h {scenario.wind_direction}",
                "temperature": f"{scenario.temperature}°C ({scenario.humidity}% humidity)",
                "note": self.wind_note(scenario.wind_direction),
            },
        }


scenario_catalog = ScenarioCatalog()

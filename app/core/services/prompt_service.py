"""
System prompt construction for the PollenPilot persona.

The prompt is a pure function of the scenario, the conversation flow and the
Melbourne-local time of day, so identical inputs always give identical text.
"""
from datetime import datetime
from typing import Optional

import pytz

from app.config import LOCAL_TIMEZONE
from app.core.models.risk_tiers import ActivityRule, get_activity_rule
from app.core.models.scenario_catalog import ScenarioCatalog
from app.schemas.chat import PollenScenario

POLLEN_SCIENCE = """MELBOURNE POLLEN SCIENCE (FIXED TIMING):
- Classification: 0-19 (LOW), 20-49 (MODERATE), 50-99 (HIGH), 100+ (EXTREME)
- PRIMARY PEAK: 5am-10am (thermal release from grass)
- SECONDARY PEAK: 6pm-9pm (evening thermal currents)
- LOWEST LEVELS: 10pm-5am (pollen settles overnight)
- Hot northerly winds = danger (bring countryside pollen)
- Cool southerly winds = relief (ocean air)
- HUMIDITY EFFECTS: High humidity (70%+) normally keeps pollen grounded = BETTER conditions, Low humidity (<30%) allows pollen to stay airborne longer = worse symptoms
- EXCEPTION - Thunderstorm asthma: pollen 50+ + humidity 80+ + approaching storms = EXTREME DANGER (humidity breaks pollen into smaller fragments that penetrate deeper into lungs)"""

INDOOR_ALTERNATIVES = """ALTERNATIVES FOR HIGH-RISK TIMES:
- Indoor gyms, shopping centers, libraries
- Covered/enclosed outdoor dining
- Air-conditioned transport
- Indoor entertainment venues"""

RESPONSE_RULES = """RESPONSE RULES:
- Maximum 40 words total
- One clear recommendation with specific time
- Use emoji for visual impact
- NO asterisks, bullets, or formatting
- For ANY outdoor activity: state exact safe times from rules above
- If current time is in avoid period: suggest next safe window
- If current time is safe: confirm and give end time
- Always provide indoor alternative for high-risk activities
- Stay focused on hayfever management only"""


def melbourne_time_of_day(now: Optional[datetime] = None, tz_name: str = LOCAL_TIMEZONE) -> str:
    """
    Format an instant as a 24-hour HH:MM string in Melbourne local time.

    Args:
        now (Optional[datetime]): Instant to format; naive values are taken as UTC
        tz_name (str): Olson timezone name

    Returns:
        str: Local time such as "07:45"
    """
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(pytz.timezone(tz_name)).strftime("%H:%M")


def humidity_note(humidity: int) -> str:
    if humidity >= 70:
        return f"High humidity ({humidity}%) keeps pollen grounded - conditions better than expected! "
    if humidity <= 40:
        return f"Low humidity ({humidity}%) keeps pollen airborne longer - extra caution needed! "
    return ""


def render_safe_times(rule: ActivityRule) -> str:
    if rule.has_safe_window:
        return (f"- Safe windows: {' and '.join(rule.safe_windows)}\n"
                f"- AVOID: {', '.join(rule.avoid_times)}")
    return ("- NO SAFE TIMES - stay indoors\n"
            "- ALL outdoor activities discouraged")


def render_activity_guidance(rule: ActivityRule) -> str:
    if rule.has_safe_window:
        running = f"Safe during: {rule.safe_windows[0]}"
        dining = f"Plan for: {rule.safe_windows[-1]}"
        walking = "Brief essential trips only during safe windows"
    else:
        running = "Indoor gym only - too risky outside"
        dining = "Indoor venues only"
        walking = "Minimize exposure - mask recommended"

    if rule.window_open_guidance != "never":
        windows = f"Safe {rule.window_open_guidance}"
    else:
        windows = "Keep closed - use air conditioning"

    return (f"- Running/Exercise: {running}\n"
            f"- Picnics/Outdoor dining: {dining}\n"
            f"- Window opening: {windows}\n"
            f"- Walking/commuting: {walking}")


def build_system_prompt(scenario: PollenScenario, flow: str, current_time: str) -> str:
    """
    Build the system instruction for the completion service.

    Args:
        scenario (PollenScenario): Current pollen and weather snapshot
        flow (str): Conversation flow label; unknown flows get the generic focus
        current_time (str): Melbourne-local time of day as HH:MM

    Returns:
        str: The complete system prompt
    """
    rule = get_activity_rule(scenario.risk_level)
    note = humidity_note(scenario.humidity)

    sections = [
        "You are PollenPilot, Melbourne's AI hayfever management assistant.",
        f"CURRENT TIME: {current_time}\n"
        f"CURRENT CONDITIONS: {scenario.conditions}\n"
        f"Grass pollen: {scenario.grass_pollen} grains/m³ ({scenario.risk_level})\n"
        f"Wind: {scenario.wind_speed}km/h {scenario.wind_direction}\n"
        f"Temperature: {scenario.temperature}°C, Humidity: {scenario.humidity}%\n"
        f"Date: {scenario.date}",
        POLLEN_SCIENCE,
    ]
    if note:
        sections.append(f"HUMIDITY NOTE: {note.strip()}")
    sections.extend([
        "OUTDOOR ACTIVITY DECISION RULES (ALWAYS FOLLOW EXACTLY):\n"
        f"Risk Level: {scenario.risk_level} ({scenario.grass_pollen} grains/m³)",
        f"SAFE TIMES FOR ALL OUTDOOR ACTIVITIES:\n{render_safe_times(rule)}",
        f"SPECIFIC ACTIVITY GUIDANCE:\n{render_activity_guidance(rule)}",
        INDOOR_ALTERNATIVES,
        RESPONSE_RULES,
        f"Current flow: {flow} - {ScenarioCatalog.flow_description(flow)}\n"
        f"Current flow context: {scenario.conditions}",
    ])
    return "\n\n".join(sections)

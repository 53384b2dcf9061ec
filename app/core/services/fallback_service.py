"""
Template-based demo replies used when the completion service rejects our credentials.
"""
from app.core.models.risk_tiers import is_high_risk
from app.schemas.chat import Flow, PollenScenario

ACTIVITY_KEYWORDS = ("run", "exercise")


def _bullets(items):
    return "\n".join(f"• {item}" for item in items)


def _morning_check_in(scenario: PollenScenario, high_risk: bool) -> str:
    risk = scenario.risk_level.lower()
    wind = scenario.wind_direction.lower()
    if high_risk:
        actions = _bullets([
            "Take antihistamine NOW (before symptoms start)",
            "Use preventative nasal spray",
            "Avoid outdoor activities 5am-10am (peak pollen release)",
            "Keep windows closed, use air conditioning if possible",
        ])
        return (
            f"Good morning! Today's looking challenging with {risk} pollen levels "
            f"({scenario.grass_pollen} grains/m³). Those {wind} winds at {scenario.wind_speed}km/h "
            f"are bringing grass pollen from the countryside.\n\n"
            f"**Immediate actions:**\n{actions}\n\n"
            f"Based on 20+ years of Melbourne data, conditions like these typically persist until "
            f"evening southerly change. Would you like specific advice for any planned activities today?"
        )

    opportunities = _bullets([
        "Good conditions for outdoor activities",
        "Safe to open windows for fresh air",
        "Light exercise outdoors should be fine",
        "Still monitor for any wind changes",
    ])
    return (
        f"Good morning! Great news - today's looking much better with {risk} pollen levels "
        f"({scenario.grass_pollen} grains/m³). The {wind} winds are helping keep the air cleaner.\n\n"
        f"**Today's opportunities:**\n{opportunities}\n\n"
        f"This matches typical {wind} wind patterns we see in Melbourne. Perfect day to get outside! "
        f"Any specific activities you're planning?"
    )


def _activity_planning(scenario: PollenScenario, high_risk: bool) -> str:
    wind = scenario.wind_direction.lower()
    if high_risk:
        alternatives = _bullets([
            "Wait until after 4pm when conditions improve",
            "Indoor gym or treadmill today",
            "If you must go out: wear sports mask, sunglasses, shower immediately after",
        ])
        return (
            f"Running this morning? I'd strongly advise against it with {scenario.grass_pollen} grains/m³ "
            f"and those hot {wind} winds. Peak pollen release is 5am-10am.\n\n"
            f"**Better alternatives:**\n{alternatives}\n\n"
            f"Tomorrow's forecast looking better with possible southerly change. "
            f"Would you like me to suggest the best time window for later today?"
        )

    approach = _bullets([
        "Early morning (6-8am) or late afternoon (4-6pm) are optimal",
        f"{wind} winds will keep pollen levels down",
        f"Great visibility with {scenario.humidity}% humidity",
    ])
    return (
        f"Perfect timing for a run! With {scenario.grass_pollen} grains/m³ and {wind} winds, "
        f"conditions are ideal for outdoor exercise.\n\n"
        f"**Best approach:**\n{approach}\n\n"
        f"Melbourne's {wind} winds consistently bring relief from ocean air. Enjoy your run! "
        f"Need route suggestions for areas with good air quality?"
    )


def _bad_day_recovery(scenario: PollenScenario) -> str:
    relief = _bullets([
        "Antihistamine if you haven't taken one yet",
        "Saline nasal rinse to clear pollen",
        "Cool compress on eyes",
        "Stay indoors with windows closed",
    ])
    rest_of_day = _bullets([
        "Avoid outdoor activities until evening",
        "Change clothes if you've been outside",
        "Shower before bed to remove pollen",
    ])
    return (
        f"I understand you're feeling rough - itchy eyes and runny nose are classic hayfever symptoms, "
        f"especially with today's {scenario.risk_level.lower()} conditions.\n\n"
        f"**Immediate relief:**\n{relief}\n\n"
        f"**For the rest of your day:**\n{rest_of_day}\n\n"
        f"You're not alone - many Melbourne residents struggle on days like this with "
        f"{scenario.grass_pollen} grains/m³. Based on wind patterns, relief should come with "
        f"tonight's southerly change. How are you feeling now?"
    )


def _general(message: str, scenario: PollenScenario) -> str:
    return (
        f"Thanks for your question about \"{message}\". With current {scenario.risk_level.lower()} "
        f"pollen conditions in Melbourne ({scenario.grass_pollen} grains/m³), I'd recommend staying "
        f"cautious. The {scenario.wind_direction.lower()} winds at {scenario.wind_speed}km/h are "
        f"typical for this time of year.\n\n"
        f"Would you like specific advice for your situation? I can help with timing, symptoms, "
        f"or activity planning based on 20+ years of Melbourne pollen data."
    )


def generate_demo_response(message: str, scenario: PollenScenario, flow: str) -> str:
    """
    Produce a deterministic assistant reply without calling the completion service.

    Branches are checked in order and the first match wins:
    Morning Check-in, Activity Planning with a run/exercise question,
    Bad Day Recovery, then a generic acknowledgement.

    Args:
        message (str): Raw user message
        scenario (PollenScenario): Current pollen and weather snapshot
        flow (str): Conversation flow label

    Returns:
        str: Reply text in the PollenPilot voice
    """
    high_risk = is_high_risk(scenario.risk_level)

    if flow == Flow.MORNING_CHECK_IN.value:
        return _morning_check_in(scenario, high_risk)

    if flow == Flow.ACTIVITY_PLANNING.value:
        lowered = message.lower()
        if any(keyword in lowered for keyword in ACTIVITY_KEYWORDS):
            return _activity_planning(scenario, high_risk)

    if flow == Flow.BAD_DAY_RECOVERY.value:
        return _bad_day_recovery(scenario)

    return _general(message, scenario)

from fastapi import APIRouter, HTTPException, Depends, Path
from typing import Dict, Any, List

from app.core.models.scenario_catalog import ScenarioCatalog, scenario_catalog

router = APIRouter()


def get_scenario_catalog():
    """Dependency to get the scenario catalogue."""
    return scenario_catalog


@router.get("", response_model=List[Dict[str, Any]])
async def list_scenarios(catalog: ScenarioCatalog = Depends(get_scenario_catalog)):
    """
    List the canonical Melbourne pollen scenarios.

    Each entry carries its risk colour and a note on what the wind direction means.
    """
    return catalog.list_scenarios()


@router.get("/flows")
async def list_flows(catalog: ScenarioCatalog = Depends(get_scenario_catalog)):
    """List the conversation flows with their descriptions."""
    return catalog.list_flows()


@router.get("/{name}")
async def get_scenario(
    name: str = Path(..., description="Scenario name"),
    catalog: ScenarioCatalog = Depends(get_scenario_catalog)
):
    """Get a single scenario by name."""
    scenario = catalog.get_scenario(name)
    if scenario is None:
        raise HTTPException(status_code=404, detail=f"Scenario {name} not found")
    return catalog.describe(scenario)


@router.get("/{name}/recommendations")
async def get_recommendations(
    name: str = Path(..., description="Scenario name"),
    catalog: ScenarioCatalog = Depends(get_scenario_catalog)
):
    """
    Get the proactive recommendation card for a scenario.

    High-risk scenarios get immediate protection steps; the rest get a good-conditions summary.
    """
    scenario = catalog.get_scenario(name)
    if scenario is None:
        raise HTTPException(status_code=404, detail=f"Scenario {name} not found")
    return catalog.get_recommendations(scenario)

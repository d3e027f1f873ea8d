# main.py

import datetime
from typing import Literal, Optional

import requests
import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from itinerary_planner.core.config import Settings
from itinerary_planner.core.errors import NotFoundError, PlannerError
from itinerary_planner.core.models import DEFAULT_BUDGET, resolve_trip
from itinerary_planner.pipeline import ItineraryPlanner

# Loads environment variables (.env)
load_dotenv()

app = FastAPI(title="Itinerary Planner")


# Request schema: either startDate/endDate or days
class ItineraryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    start_date: Optional[datetime.date] = Field(default=None, alias="startDate")
    end_date: Optional[datetime.date] = Field(default=None, alias="endDate")
    days: Optional[int] = None
    budget: Literal["budget", "mid-range", "luxury"] = DEFAULT_BUDGET


def get_planner():
    session = requests.Session()
    try:
        yield ItineraryPlanner.from_settings(Settings.from_env(), session)
    finally:
        session.close()


@app.post("/api/itinerary", response_model=dict)
def generate_itinerary_endpoint(req: ItineraryRequest,
                                planner: ItineraryPlanner = Depends(get_planner)):
    try:
        trip = resolve_trip(req.city, req.budget, req.start_date, req.end_date, req.days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        result = planner.plan(trip)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (PlannerError, requests.RequestException) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return result.to_dict()


def serve() -> None:
    """Run the API with uvicorn (``itinerary-planner-api``)."""
    settings = Settings.from_env()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port,
                log_level=settings.log_level.lower())

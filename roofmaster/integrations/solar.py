"""
Satellite roof measurement via Google Geocoding + the Solar API.

The Solar API reports areas in square meters and pitch in degrees; the
summary converts to square feet, roofing squares and x/12 pitch ratios.
"""

import logging
from typing import Optional

from ..estimator.engine import round_half_up
from ..estimator.geometry import (
    orientation_from_azimuth,
    pitch_ratio_from_degrees,
    square_meters_to_square_feet,
    squares_from_area,
)
from .http import build_url, request_json

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
BUILDING_INSIGHTS_URL = "https://solar.googleapis.com/v1/buildingInsights:findClosest"


def geocode_address(address: str, api_key: str) -> Optional[dict]:
    """Return {"lat", "lng"} for an address, or None when Google finds nothing."""
    url = build_url(GEOCODE_URL, {"address": address, "key": api_key})
    data = request_json("google-geocode", url)

    if data.get("status") != "OK" or not data.get("results"):
        logger.info("Geocode found no match for %r (status=%s)", address, data.get("status"))
        return None

    location = data["results"][0]["geometry"]["location"]
    return {"lat": location["lat"], "lng": location["lng"]}


def get_building_insights(lat: float, lng: float, api_key: str) -> dict:
    url = build_url(BUILDING_INSIGHTS_URL, {
        "location.latitude": lat,
        "location.longitude": lng,
        "key": api_key,
    })
    return request_json("google-solar", url)


def summarize_measurements(building: dict) -> dict:
    """
    Reduce a buildingInsights response to what the estimate screen needs.

    Whole-building area comes from buildingStats; when that is missing the
    segment areas are summed instead.
    """
    potential = building.get("solarPotential") or {}
    stats = potential.get("buildingStats") or {}
    segments = potential.get("roofSegmentStats") or []

    area_m2 = stats.get("areaMeters2") or sum(seg.get("areaMeters2", 0) for seg in segments)
    area_sq_ft = square_meters_to_square_feet(area_m2)

    if segments:
        avg_pitch = round_half_up(
            sum(seg.get("pitchDegrees", 0) for seg in segments) / len(segments)
        )
    else:
        avg_pitch = 0

    summarized = []
    for index, seg in enumerate(segments):
        pitch = seg.get("pitchDegrees", 0)
        azimuth = seg.get("azimuthDegrees", 0)
        summarized.append({
            "id": index + 1,
            "areaSqFt": round_half_up(square_meters_to_square_feet(seg.get("areaMeters2", 0))),
            "pitchDegrees": round_half_up(pitch),
            "pitchRatio": pitch_ratio_from_degrees(pitch),
            "orientation": orientation_from_azimuth(azimuth),
            "azimuthDegrees": round_half_up(azimuth),
        })

    return {
        "totalAreaSqFt": round_half_up(area_sq_ft),
        "roofSquares": squares_from_area(area_sq_ft),
        "avgPitchDegrees": avg_pitch,
        "avgPitchRatio": pitch_ratio_from_degrees(avg_pitch),
        "segmentCount": len(summarized),
        "segments": summarized,
    }


def measure_roof(address: str, api_key: str) -> Optional[dict]:
    """Geocode, fetch insights and summarize. None when the address is unknown."""
    coordinates = geocode_address(address, api_key)
    if coordinates is None:
        return None

    building = get_building_insights(coordinates["lat"], coordinates["lng"], api_key)
    return {
        "address": address,
        "coordinates": coordinates,
        "measurements": summarize_measurements(building),
        "imageryDate": building.get("imageryDate"),
        "imageryQuality": building.get("imageryQuality"),
    }

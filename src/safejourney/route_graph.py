"""Curated intercity travel routes and their traversed states.

Routes are stored in one direction only. A lookup in the opposite direction
returns a derived edge with swapped endpoints and reversed waypoints; the
stored edge is never modified.
"""

from __future__ import annotations

from typing import List

from .models import RouteEdge
from .regions import normalize_region_name

FCT = "Federal Capital Territory"

MAJOR_ROUTES: tuple[RouteEdge, ...] = (
    # Lagos to the north
    RouteEdge(
        id="lagos-abuja",
        origin="Lagos",
        destination=FCT,
        waypoints=("Ogun", "Oyo", "Kwara", "Niger"),
        distance_km=560,
        estimated_hours=8,
        description="Lagos-Ibadan-Ilorin-Abuja Expressway",
    ),
    RouteEdge(
        id="lagos-kano",
        origin="Lagos",
        destination="Kano",
        waypoints=("Ogun", "Oyo", "Kwara", "Niger", "Kaduna"),
        distance_km=980,
        estimated_hours=14,
        description="Via Abuja-Kaduna-Kano",
    ),
    RouteEdge(
        id="lagos-kaduna",
        origin="Lagos",
        destination="Kaduna",
        waypoints=("Ogun", "Oyo", "Kwara", "Niger"),
        distance_km=750,
        estimated_hours=11,
        description="Via Ilorin-Abuja",
    ),
    RouteEdge(
        id="lagos-benin",
        origin="Lagos",
        destination="Edo",
        waypoints=("Ogun", "Ondo"),
        distance_km=310,
        estimated_hours=5,
        description="Lagos-Benin Expressway",
    ),
    RouteEdge(
        id="lagos-portharcourt",
        origin="Lagos",
        destination="Rivers",
        waypoints=("Ogun", "Ondo", "Edo", "Delta", "Bayelsa"),
        distance_km=590,
        estimated_hours=9,
        description="East-West Road via Benin",
    ),
    # Abuja connections
    RouteEdge(
        id="abuja-kano",
        origin=FCT,
        destination="Kano",
        waypoints=("Kaduna",),
        distance_km=420,
        estimated_hours=6,
        description="Abuja-Kaduna-Kano Expressway",
    ),
    RouteEdge(
        id="abuja-kaduna",
        origin=FCT,
        destination="Kaduna",
        distance_km=180,
        estimated_hours=2.5,
        description="Abuja-Kaduna Expressway",
    ),
    RouteEdge(
        id="abuja-jos",
        origin=FCT,
        destination="Plateau",
        waypoints=("Nasarawa",),
        distance_km=280,
        estimated_hours=4,
        description="Via Nasarawa",
    ),
    RouteEdge(
        id="abuja-lokoja",
        origin=FCT,
        destination="Kogi",
        distance_km=170,
        estimated_hours=2.5,
        description="Abuja-Lokoja Highway",
    ),
    RouteEdge(
        id="abuja-makurdi",
        origin=FCT,
        destination="Benue",
        waypoints=("Nasarawa",),
        distance_km=300,
        estimated_hours=4.5,
        description="Via Lafia",
    ),
    # Northern routes
    RouteEdge(
        id="kano-kaduna",
        origin="Kano",
        destination="Kaduna",
        distance_km=220,
        estimated_hours=3,
        description="Kano-Kaduna Expressway",
    ),
    RouteEdge(
        id="kano-maiduguri",
        origin="Kano",
        destination="Borno",
        waypoints=("Jigawa", "Bauchi", "Yobe"),
        distance_km=600,
        estimated_hours=9,
        description="Via Potiskum",
    ),
    RouteEdge(
        id="sokoto-kano",
        origin="Sokoto",
        destination="Kano",
        waypoints=("Zamfara", "Katsina"),
        distance_km=420,
        estimated_hours=7,
        description="Via Gusau-Katsina",
    ),
    # Eastern routes
    RouteEdge(
        id="enugu-portharcourt",
        origin="Enugu",
        destination="Rivers",
        waypoints=("Abia",),
        distance_km=240,
        estimated_hours=4,
        description="Enugu-Port Harcourt Expressway",
    ),
    RouteEdge(
        id="enugu-onitsha",
        origin="Enugu",
        destination="Anambra",
        distance_km=100,
        estimated_hours=1.5,
        description="Enugu-Onitsha Expressway",
    ),
    RouteEdge(
        id="aba-portharcourt",
        origin="Abia",
        destination="Rivers",
        distance_km=60,
        estimated_hours=1,
        description="Aba-Port Harcourt Expressway",
    ),
    RouteEdge(
        id="calabar-portharcourt",
        origin="Cross River",
        destination="Rivers",
        waypoints=("Akwa Ibom",),
        distance_km=200,
        estimated_hours=3.5,
        description="Calabar-Uyo-PH Road",
    ),
    # Western routes
    RouteEdge(
        id="lagos-ibadan",
        origin="Lagos",
        destination="Oyo",
        waypoints=("Ogun",),
        distance_km=130,
        estimated_hours=2,
        description="Lagos-Ibadan Expressway",
    ),
    RouteEdge(
        id="ibadan-ilorin",
        origin="Oyo",
        destination="Kwara",
        distance_km=180,
        estimated_hours=3,
        description="Ibadan-Ilorin Road",
    ),
    RouteEdge(
        id="benin-onitsha",
        origin="Edo",
        destination="Anambra",
        waypoints=("Delta",),
        distance_km=180,
        estimated_hours=3,
        description="Benin-Asaba-Onitsha",
    ),
    RouteEdge(
        id="lagos-abeokuta",
        origin="Lagos",
        destination="Ogun",
        distance_km=80,
        estimated_hours=1.5,
        description="Lagos-Abeokuta Expressway",
    ),
    RouteEdge(
        id="ibadan-akure",
        origin="Oyo",
        destination="Ondo",
        waypoints=("Osun",),
        distance_km=200,
        estimated_hours=3,
        description="Via Ife",
    ),
)


def find_route(origin: str, destination: str, routes: tuple[RouteEdge, ...] = MAJOR_ROUTES) -> RouteEdge | None:
    start = normalize_region_name(origin).casefold()
    end = normalize_region_name(destination).casefold()
    for edge in routes:
        edge_start = edge.origin.casefold()
        edge_end = edge.destination.casefold()
        if edge_start == start and edge_end == end:
            return edge
        if edge_start == end and edge_end == start:
            return edge.reversed()
    return None


def get_route_states(edge: RouteEdge) -> List[str]:
    return [edge.origin, *edge.waypoints, edge.destination]


def get_all_route_states(routes: tuple[RouteEdge, ...] = MAJOR_ROUTES) -> List[str]:
    states: set[str] = set()
    for edge in routes:
        states.update(get_route_states(edge))
    return sorted(states)


def route_endpoints(routes: tuple[RouteEdge, ...] = MAJOR_ROUTES) -> List[str]:
    endpoints: set[str] = set()
    for edge in routes:
        endpoints.add(edge.origin)
        endpoints.add(edge.destination)
    return sorted(endpoints)


def list_routes(routes: tuple[RouteEdge, ...] = MAJOR_ROUTES) -> List[RouteEdge]:
    return list(routes)

"""US growing regions.

Centroids are used both as the weather lookup point and for caller distance.
"""

from __future__ import annotations

from harvest_planner.reference.catalog import ClimateSummary, Region

GROWING_REGIONS: list[Region] = [
    # === SOUTHEAST ===
    Region(
        id="indian_river",
        display_name="Indian River District",
        state="FL",
        latitude=27.6,
        longitude=-80.4,
        climate=ClimateSummary(45, 350, 305, "10"),
    ),
    Region(
        id="central_florida",
        display_name="Central Florida",
        state="FL",
        latitude=28.5,
        longitude=-81.4,
        climate=ClimateSummary(52, 340, 288, "9"),
    ),
    Region(
        id="georgia_piedmont",
        display_name="Georgia Piedmont",
        state="GA",
        latitude=32.8,
        longitude=-83.6,
        climate=ClimateSummary(90, 310, 220, "8"),
    ),
    Region(
        id="south_carolina_ridge",
        display_name="SC Peach Ridge",
        state="SC",
        latitude=34.5,
        longitude=-82.0,
        climate=ClimateSummary(85, 310, 225, "7"),
    ),
    Region(
        id="gulf_coast_citrus",
        display_name="Gulf Coast",
        state="LA",
        latitude=30.0,
        longitude=-90.0,
        climate=ClimateSummary(60, 330, 270, "9"),
    ),
    # === TEXAS ===
    Region(
        id="texas_rgv",
        display_name="Texas RGV",
        state="TX",
        latitude=26.2,
        longitude=-98.2,
        climate=ClimateSummary(35, 355, 320, "9"),
    ),
    Region(
        id="texas_hill_country",
        display_name="Texas Hill Country",
        state="TX",
        latitude=30.3,
        longitude=-98.5,
        climate=ClimateSummary(80, 320, 240, "8"),
    ),
    # === CALIFORNIA ===
    Region(
        id="california_central_valley",
        display_name="CA Central Valley",
        state="CA",
        latitude=36.7,
        longitude=-119.8,
        climate=ClimateSummary(60, 335, 275, "9"),
    ),
    Region(
        id="california_coastal",
        display_name="CA Central Coast",
        state="CA",
        latitude=36.9,
        longitude=-121.8,
        climate=ClimateSummary(45, 355, 310, "9"),
    ),
    # === PACIFIC NORTHWEST ===
    Region(
        id="pacific_nw_yakima",
        display_name="Yakima Valley",
        state="WA",
        latitude=46.6,
        longitude=-120.5,
        climate=ClimateSummary(120, 290, 170, "6"),
    ),
    Region(
        id="pacific_nw_hood_river",
        display_name="Hood River Valley",
        state="OR",
        latitude=45.7,
        longitude=-121.5,
        climate=ClimateSummary(110, 290, 180, "7"),
    ),
    # === GREAT LAKES / NORTHEAST ===
    Region(
        id="michigan_west",
        display_name="West Michigan",
        state="MI",
        latitude=44.8,
        longitude=-85.6,
        climate=ClimateSummary(135, 275, 140, "5"),
    ),
    Region(
        id="new_york_finger_lakes",
        display_name="Finger Lakes",
        state="NY",
        latitude=42.5,
        longitude=-76.5,
        climate=ClimateSummary(125, 280, 155, "6"),
    ),
    Region(
        id="new_england",
        display_name="New England",
        state="VT",
        latitude=44.0,
        longitude=-72.7,
        climate=ClimateSummary(130, 270, 140, "5"),
    ),
]

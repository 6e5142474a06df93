"""Master product catalog.

Category -> Subcategory -> Product -> Cultivar -> Regional Offering

Cultivars use one of three timing models:
  - gdd:      field crops whose harvest tracks accumulated heat
  - calendar: perennials, animal products and honey with predictable months
  - parent:   lightly processed products timed by a source cultivar
              (fresh juice follows its orange, cider follows its apple)

Regional offerings may override any threshold for microclimate effects.
"""

from __future__ import annotations

from harvest_planner.reference.catalog import (
    Cultivar,
    ModelType,
    Product,
    RegionalOffering,
    Thresholds,
)

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "fruit": "Fruits",
    "vegetable": "Vegetables",
    "nut": "Nuts",
    "meat": "Meat & Poultry",
    "dairy": "Dairy & Eggs",
    "honey": "Honey",
    "processed": "Lightly Processed",
}


# =============================================================================
# PRODUCTS
# =============================================================================

PRODUCTS: list[Product] = [
    # Citrus
    Product("orange", "Orange", "fruit", "citrus", "Sweet citrus fruit"),
    Product("grapefruit", "Grapefruit", "fruit", "citrus", "Tangy breakfast citrus"),
    Product("tangerine", "Tangerine", "fruit", "citrus", "Easy-peel mandarin family"),
    Product("lemon", "Lemon", "fruit", "citrus", "Versatile cooking citrus"),
    # Tree fruit
    Product("apple", "Apple", "fruit", "pome_fruit", "Americas favorite fruit"),
    Product("peach", "Peach", "fruit", "stone_fruit", "Summer stone fruit"),
    Product("cherry", "Cherry", "fruit", "stone_fruit", "Sweet and tart varieties"),
    # Berries
    Product("strawberry", "Strawberry", "fruit", "berry", "Spring-summer favorite"),
    Product("blueberry", "Blueberry", "fruit", "berry", "Antioxidant-rich berry"),
    # Vegetables
    Product("tomato", "Tomato", "vegetable", "nightshade", "Summer garden essential"),
    Product("pepper", "Pepper", "vegetable", "nightshade", "Sweet and hot varieties"),
    Product("carrot", "Carrot", "vegetable", "root", "Sweet orange root"),
    Product("potato", "Potato", "vegetable", "root", "Versatile tuber"),
    Product("onion", "Onion", "vegetable", "allium", "Cooking foundation"),
    Product("garlic", "Garlic", "vegetable", "allium", "Flavor essential"),
    # Nuts
    Product("pecan", "Pecan", "nut", "tree_nut", "Southern nut"),
    Product("walnut", "Walnut", "nut", "tree_nut", "Brain-shaped nut"),
    Product("almond", "Almond", "nut", "tree_nut", "California staple"),
    Product("hazelnut", "Hazelnut", "nut", "tree_nut", "Oregon filbert"),
    # Animal products
    Product("beef", "Beef", "meat", "red_meat", "Pasture-raised cattle"),
    Product("pork", "Pork", "meat", "red_meat", "Heritage breeds"),
    Product("turkey", "Turkey", "meat", "poultry", "Heritage turkey"),
    Product("eggs", "Eggs", "dairy", "eggs", "Pasture-raised eggs"),
    Product("milk", "Milk", "dairy", "milk", "Grass-fed dairy"),
    Product("honey", "Honey", "honey", "raw_honey", "Raw local honey"),
    # Processed
    Product("orange_juice", "Orange Juice", "processed", "juice", "Fresh-squeezed OJ"),
    Product("apple_cider", "Apple Cider", "processed", "cider", "Fresh pressed cider"),
    Product("maple_syrup", "Maple Syrup", "processed", "syrup", "Pure maple"),
]


def _calendar(
    cultivar_id: str,
    product_id: str,
    display_name: str,
    peak_months: tuple[int, ...],
    flavor_profile: str | None = None,
    *,
    is_heritage: bool = False,
) -> Cultivar:
    return Cultivar(
        id=cultivar_id,
        product_id=product_id,
        display_name=display_name,
        model_type=ModelType.CALENDAR,
        defaults=Thresholds(peak_months=peak_months),
        flavor_profile=flavor_profile,
        is_heritage=is_heritage,
    )


def _gdd(
    cultivar_id: str,
    product_id: str,
    display_name: str,
    base_temp: float,
    maturity: float,
    peak: float,
    window: float,
    flavor_profile: str | None = None,
    *,
    is_heritage: bool = False,
) -> Cultivar:
    return Cultivar(
        id=cultivar_id,
        product_id=product_id,
        display_name=display_name,
        model_type=ModelType.GDD,
        defaults=Thresholds(
            base_temp=base_temp,
            gdd_to_maturity=maturity,
            gdd_to_peak=peak,
            gdd_window=window,
        ),
        flavor_profile=flavor_profile,
        is_heritage=is_heritage,
    )


def _parent(
    cultivar_id: str,
    product_id: str,
    display_name: str,
    parent_cultivar_id: str,
    flavor_profile: str | None = None,
) -> Cultivar:
    return Cultivar(
        id=cultivar_id,
        product_id=product_id,
        display_name=display_name,
        model_type=ModelType.PARENT,
        parent_cultivar_id=parent_cultivar_id,
        flavor_profile=flavor_profile,
    )


# =============================================================================
# CULTIVARS
# =============================================================================

CULTIVARS: list[Cultivar] = [
    # Citrus: perennial, predictable windows
    _calendar("navel_orange", "orange", "Washington Navel", (11, 12, 1),
              "Sweet, seedless, ideal for eating fresh"),
    _calendar("cara_cara", "orange", "Cara Cara", (12, 1, 2), "Pink flesh, low acid, berry notes"),
    _calendar("valencia_orange", "orange", "Valencia", (3, 4, 5, 6),
              "Premier juicing orange, sweet-tart balance"),
    _calendar("ruby_red_grapefruit", "grapefruit", "Ruby Red", (11, 12, 1, 2, 3, 4, 5),
              "Sweet-tart, deep pink flesh"),
    _calendar("rio_star_grapefruit", "grapefruit", "Rio Star", (11, 12, 1, 2, 3),
              "Very sweet, red flesh, Texas favorite"),
    _calendar("satsuma", "tangerine", "Owari Satsuma", (10, 11, 12), "Very sweet, seedless, easy peel"),
    _calendar("honey_tangerine", "tangerine", "Honey Tangerine (Murcott)", (1, 2, 3, 4),
              "Intensely sweet, rich flavor, some seeds"),
    _calendar("meyer_lemon", "lemon", "Meyer Lemon", (11, 12, 1, 2, 3), "Sweet-tart, floral, thin skin"),
    # Apples
    _calendar("honeycrisp", "apple", "Honeycrisp", (9, 10), "Explosive crunch, honey-sweet with tang"),
    _calendar("fuji", "apple", "Fuji", (10, 11), "Very sweet, dense, long storage"),
    _calendar("cosmic_crisp", "apple", "Cosmic Crisp", (10, 11),
              "Ultra crisp, balanced sweet-acid, slow browning"),
    # Stone fruit
    _calendar("elberta_peach", "peach", "Elberta", (7, 8),
              "Classic peach flavor, freestone, great for canning", is_heritage=True),
    _calendar("redhaven", "peach", "Redhaven", (6, 7), "Bright red skin, firm yellow flesh, balanced flavor"),
    _calendar("bing_cherry", "cherry", "Bing", (6, 7), "Deep red, firm, intensely sweet"),
    _calendar("montmorency", "cherry", "Montmorency", (7,), "Tart, bright red, perfect for pies",
              is_heritage=True),
    # Berries
    _calendar("chandler_strawberry", "strawberry", "Chandler", (3, 4, 5, 6),
              "Large, very sweet, California classic"),
    _calendar("earliglow", "strawberry", "Earliglow", (5, 6), "Exceptional flavor, early season"),
    _calendar("bluecrop", "blueberry", "Bluecrop", (7, 8), "Classic blueberry flavor, reliable producer"),
    _calendar("rabbiteye", "blueberry", "Rabbiteye", (6, 7, 8), "Heat-tolerant, sweet, southern variety"),
    # Tomatoes
    _gdd("brandywine", "tomato", "Brandywine", 50, 1600, 1800, 400,
         "Pink, rich, complex heirloom flavor", is_heritage=True),
    _gdd("cherokee_purple", "tomato", "Cherokee Purple", 50, 1500, 1700, 400,
         "Deep purple, smoky-sweet, pre-Columbian origin", is_heritage=True),
    _gdd("san_marzano", "tomato", "San Marzano", 50, 1400, 1600, 350,
         "Paste tomato, low acid, sweet, Italian classic", is_heritage=True),
    _gdd("sungold", "tomato", "Sungold Cherry", 50, 1200, 1400, 400,
         "Orange cherry, intensely sweet, tropical notes"),
    # Peppers
    _gdd("jimmy_nardello", "pepper", "Jimmy Nardello", 55, 1200, 1400, 350,
         "Sweet frying pepper, Italian heirloom", is_heritage=True),
    _gdd("hatch_chile", "pepper", "Hatch Green Chile", 55, 1300, 1500, 350,
         "Medium heat, earthy, roasting chile", is_heritage=True),
    # Roots and alliums
    _gdd("nantes_carrot", "carrot", "Nantes", 40, 1100, 1250, 300, "Sweet, tender, cylindrical",
         is_heritage=True),
    _gdd("yukon_gold", "potato", "Yukon Gold", 45, 1400, 1600, 400, "Buttery, golden, all-purpose"),
    _gdd("fingerling", "potato", "Russian Banana Fingerling", 45, 1500, 1700, 400,
         "Waxy, nutty, holds shape"),
    _gdd("vidalia_onion", "onion", "Vidalia", 40, 1400, 1600, 350, "Famously sweet, mild, juicy"),
    _gdd("walla_walla", "onion", "Walla Walla", 40, 1500, 1700, 350,
         "Sweet, mild, Pacific Northwest treasure"),
    _gdd("music_garlic", "garlic", "Music (Hardneck)", 35, 1800, 2000, 400,
         "Robust, complex, large cloves"),
    # Nuts
    _gdd("pecan", "pecan", "Desirable Pecan", 50, 2800, 3200, 600, "Rich, buttery, classic pecan flavor"),
    _gdd("walnut", "walnut", "Chandler Walnut", 50, 2600, 3000, 500, "Mild, versatile, light-colored"),
    _gdd("almond", "almond", "Nonpareil Almond", 50, 2400, 2800, 400, "Sweet, delicate, paper-thin shell"),
    _gdd("hazelnut", "hazelnut", "Barcelona Hazelnut", 45, 2200, 2600, 500,
         "Intense flavor, Oregon classic", is_heritage=True),
    # Animal products
    _calendar("grass_fed_beef", "beef", "Grass-Fed Beef", (9, 10, 11), "Lean, rich, true beef flavor"),
    _calendar("heritage_pork", "pork", "Heritage Pork", (10, 11, 12),
              "Berkshire/Duroc, marbled, exceptional flavor"),
    _calendar("heritage_turkey", "turkey", "Heritage Turkey", (10, 11),
              "Bourbon Red/Narragansett, deep flavor"),
    _calendar("pasture_eggs", "eggs", "Pasture-Raised Eggs", (3, 4, 5, 6, 7, 8, 9),
              "Deep orange yolks, rich flavor"),
    _calendar("grass_milk", "milk", "100% Grass-Fed Milk", (4, 5, 6, 7, 8, 9, 10),
              "Rich, seasonal variation in flavor"),
    # Honey
    _calendar("wildflower_honey", "honey", "Wildflower Honey", (5, 6, 7, 8, 9),
              "Complex, varies by region and season"),
    _calendar("tupelo_honey", "honey", "Tupelo Honey", (4, 5), "Buttery, mild, never crystallizes"),
    _calendar("sourwood_honey", "honey", "Sourwood Honey", (7, 8), "Buttery, gingerbread notes, Appalachian"),
    # Processed
    _parent("fresh_squeezed_oj", "orange_juice", "Fresh-Squeezed Orange Juice", "valencia_orange",
            "Bright, fresh, unpasteurized"),
    _parent("fresh_cider", "apple_cider", "Fresh Apple Cider", "honeycrisp",
            "Unfiltered, fresh-pressed, complex apple"),
    _calendar("grade_a_maple", "maple_syrup", "Grade A Amber Maple Syrup", (2, 3, 4),
              "Rich maple flavor, mid-season run"),
]


# =============================================================================
# REGIONAL OFFERINGS
# =============================================================================

REGIONAL_OFFERINGS: list[RegionalOffering] = [
    # Citrus - Florida / Gulf
    RegionalOffering("navel_orange", "indian_river", quality_tier="exceptional",
                     flavor_notes="Sweet, optimal Brix from Indian River soil"),
    RegionalOffering("navel_orange", "central_florida", quality_tier="excellent"),
    RegionalOffering("valencia_orange", "indian_river", quality_tier="exceptional",
                     flavor_notes="Premium juice orange"),
    RegionalOffering("ruby_red_grapefruit", "indian_river", quality_tier="exceptional"),
    RegionalOffering("honey_tangerine", "central_florida", quality_tier="exceptional"),
    RegionalOffering("satsuma", "gulf_coast_citrus", quality_tier="excellent",
                     flavor_notes="Cold-hardy, early season"),
    RegionalOffering("meyer_lemon", "gulf_coast_citrus", quality_tier="good"),
    # Citrus - Texas / California
    RegionalOffering("rio_star_grapefruit", "texas_rgv", quality_tier="exceptional",
                     flavor_notes="Texas terroir, extra sweet"),
    RegionalOffering("navel_orange", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("cara_cara", "california_central_valley", quality_tier="exceptional"),
    # Apples
    RegionalOffering("honeycrisp", "pacific_nw_yakima", quality_tier="exceptional",
                     flavor_notes="Cool nights enhance sweetness and crunch"),
    RegionalOffering("fuji", "pacific_nw_yakima", quality_tier="excellent"),
    RegionalOffering("cosmic_crisp", "pacific_nw_yakima", quality_tier="exceptional",
                     flavor_notes="Washington-bred variety"),
    RegionalOffering("honeycrisp", "new_york_finger_lakes", quality_tier="excellent",
                     flavor_notes="Shorter season, intense flavor"),
    RegionalOffering("honeycrisp", "new_england", quality_tier="excellent"),
    RegionalOffering("honeycrisp", "michigan_west", quality_tier="excellent"),
    # Stone fruit
    RegionalOffering("elberta_peach", "georgia_piedmont", quality_tier="exceptional",
                     flavor_notes="Georgia terroir, classic Southern peach"),
    RegionalOffering("redhaven", "georgia_piedmont", quality_tier="excellent"),
    RegionalOffering("elberta_peach", "south_carolina_ridge", quality_tier="excellent"),
    RegionalOffering("elberta_peach", "california_central_valley", quality_tier="excellent",
                     overrides=Thresholds(peak_months=(6, 7))),
    RegionalOffering("bing_cherry", "pacific_nw_yakima", quality_tier="exceptional"),
    RegionalOffering("bing_cherry", "pacific_nw_hood_river", quality_tier="excellent"),
    RegionalOffering("montmorency", "michigan_west", quality_tier="exceptional",
                     flavor_notes="Tart cherry capital of the world"),
    # Berries
    RegionalOffering("chandler_strawberry", "california_coastal", quality_tier="exceptional"),
    RegionalOffering("chandler_strawberry", "central_florida", quality_tier="excellent",
                     overrides=Thresholds(peak_months=(1, 2, 3)),
                     flavor_notes="Winter strawberries"),
    RegionalOffering("earliglow", "new_england", quality_tier="excellent"),
    RegionalOffering("bluecrop", "michigan_west", quality_tier="exceptional"),
    RegionalOffering("bluecrop", "new_england", quality_tier="excellent"),
    RegionalOffering("rabbiteye", "georgia_piedmont", quality_tier="excellent"),
    # Tomatoes
    RegionalOffering("brandywine", "georgia_piedmont", quality_tier="exceptional"),
    RegionalOffering("brandywine", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("cherokee_purple", "georgia_piedmont", quality_tier="exceptional",
                     flavor_notes="Cherokee heritage, Southern terroir"),
    RegionalOffering("san_marzano", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("sungold", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("sungold", "new_england", quality_tier="excellent"),
    # Peppers
    RegionalOffering("jimmy_nardello", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("hatch_chile", "texas_rgv", quality_tier="exceptional"),
    # Roots and alliums
    RegionalOffering("nantes_carrot", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("nantes_carrot", "pacific_nw_hood_river", quality_tier="excellent"),
    RegionalOffering("yukon_gold", "pacific_nw_yakima", quality_tier="excellent"),
    RegionalOffering("fingerling", "new_york_finger_lakes", quality_tier="excellent"),
    RegionalOffering("vidalia_onion", "georgia_piedmont", quality_tier="exceptional",
                     flavor_notes="True Vidalia, Georgia terroir required"),
    RegionalOffering("walla_walla", "pacific_nw_yakima", quality_tier="exceptional"),
    RegionalOffering("music_garlic", "new_york_finger_lakes", quality_tier="excellent"),
    # Nuts
    RegionalOffering("pecan", "georgia_piedmont", quality_tier="excellent"),
    RegionalOffering("pecan", "texas_hill_country", quality_tier="excellent"),
    RegionalOffering("walnut", "california_central_valley", quality_tier="excellent"),
    RegionalOffering("almond", "california_central_valley", quality_tier="exceptional",
                     overrides=Thresholds(gdd_to_maturity=2450)),
    RegionalOffering("hazelnut", "pacific_nw_hood_river", quality_tier="exceptional",
                     flavor_notes="Oregon filberts, world-class"),
    # Animal products
    RegionalOffering("grass_fed_beef", "texas_hill_country", quality_tier="excellent"),
    RegionalOffering("grass_fed_beef", "pacific_nw_yakima", quality_tier="excellent"),
    RegionalOffering("heritage_pork", "georgia_piedmont", quality_tier="excellent"),
    RegionalOffering("heritage_pork", "new_england", quality_tier="excellent"),
    RegionalOffering("heritage_turkey", "new_england", quality_tier="exceptional"),
    RegionalOffering("pasture_eggs", "georgia_piedmont", quality_tier="excellent"),
    RegionalOffering("grass_milk", "new_england", quality_tier="excellent"),
    # Honey
    RegionalOffering("wildflower_honey", "georgia_piedmont", quality_tier="excellent"),
    RegionalOffering("tupelo_honey", "gulf_coast_citrus", quality_tier="exceptional",
                     flavor_notes="Rare, only from Gulf Coast swamps"),
    RegionalOffering("sourwood_honey", "georgia_piedmont", quality_tier="exceptional"),
    # Processed
    RegionalOffering("fresh_squeezed_oj", "indian_river", quality_tier="exceptional"),
    RegionalOffering("fresh_cider", "new_england", quality_tier="excellent"),
    RegionalOffering("fresh_cider", "new_york_finger_lakes", quality_tier="excellent"),
    RegionalOffering("grade_a_maple", "new_england", quality_tier="exceptional"),
    RegionalOffering("grade_a_maple", "new_york_finger_lakes", quality_tier="excellent"),
]

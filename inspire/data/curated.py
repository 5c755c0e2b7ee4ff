"""Hand-picked candidates used when the generator is unavailable or short.

Records use the generator's raw shape so they go through the same
normalizer, filter and scorer as live output. ``approx_nonstop_hours`` are
estimates from London; ``lat``/``lon`` let the caller re-estimate from other
known origins.
"""
from __future__ import annotations

from typing import Any, Dict, List

SHORT_HAUL_MAX_HOURS = 5.0

SHORT_HAUL_POOL: List[Dict[str, Any]] = [
    {
        "city": "Vienna", "country": "Austria", "region": "europe", "type": "culture",
        "themes": ["museums", "performing arts", "food & drink", "romance"],
        "best_seasons": ["spring", "autumn", "winter"], "approx_nonstop_hours": 2.3,
        "lat": 48.2082, "lon": 16.3738,
        "summary": "Imperial palaces, grand cafés and world-class concerts in a compact, walkable capital.",
        "highlights": [
            "Vienna State Opera, where the gilded hall hushes before the overture",
            "Schönbrunn Palace gardens with the scent of clipped box hedges",
            "A coffee house slice of Sachertorte with dark apricot glaze",
        ],
    },
    {
        "city": "Barcelona", "country": "Spain", "region": "europe", "type": "city",
        "themes": ["cities", "food & drink", "beaches", "nightlife", "architecture"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 2.2,
        "lat": 41.3874, "lon": 2.1686,
        "summary": "Gaudí landmarks, late tapas and a city beach within walking distance of the Gothic Quarter.",
        "highlights": [
            "Sagrada Família, with light pouring through stained glass in jewel colours",
            "La Boqueria market stalls piled with jamón and fresh figs",
            "Barceloneta beach at dusk with the smell of grilled sardines",
        ],
    },
    {
        "city": "Tenerife", "country": "Spain", "region": "atlantic_islands", "type": "beach",
        "themes": ["all-inclusive resorts", "beaches", "sun", "hiking", "family"],
        "best_seasons": ["spring", "summer", "autumn", "winter"], "approx_nonstop_hours": 4.3,
        "lat": 28.2916, "lon": -16.6291,
        "summary": "Year-round sunshine, volcanic landscapes and family resorts on the Canary Islands.",
        "highlights": [
            "Teide National Park cable car above a sea of clouds",
            "Whale and dolphin watching off the cliffs of Los Gigantes",
            "Playa del Duque's golden sand and calm turquoise water",
        ],
    },
    {
        "city": "Marrakech", "country": "Morocco", "region": "north_africa", "type": "culture",
        "themes": ["markets", "culture", "sun", "food", "spa"],
        "best_seasons": ["spring", "autumn", "winter"], "approx_nonstop_hours": 3.6,
        "lat": 31.6295, "lon": -7.9811,
        "summary": "Souks, riads and rooftop sunsets with the Atlas Mountains on the horizon.",
        "highlights": [
            "Jemaa el-Fnaa at nightfall, thick with smoke from food stalls",
            "Jardin Majorelle's cobalt-blue villa among cactus gardens",
            "A traditional hammam scrub with black olive soap",
        ],
    },
    {
        "city": "Crete", "country": "Greece", "region": "europe", "type": "beach",
        "themes": ["beaches", "history", "food", "hiking", "family"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 4.0,
        "lat": 35.2401, "lon": 24.8093,
        "summary": "Pink-sand beaches, Minoan ruins and slow lunches of olive oil and mountain herbs.",
        "highlights": [
            "Elafonissi beach where pink sand meets shallow lagoons",
            "Chania's Venetian harbour lit up on a warm evening",
            "Knossos palace ruins with red-painted columns in the sun",
        ],
    },
    {
        "city": "Lisbon", "country": "Portugal", "region": "europe", "type": "city",
        "themes": ["cities", "food & drink", "nightlife", "history", "photography"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 2.7,
        "lat": 38.7223, "lon": -9.1393,
        "summary": "Hilltop viewpoints, tiled façades and custard tarts still warm from the oven.",
        "highlights": [
            "Tram 28 rattling up through the Alfama's narrow lanes",
            "Pastéis de Belém with cinnamon dusted over crackling pastry",
            "Miradouro da Senhora do Monte at sunset over terracotta roofs",
        ],
    },
    {
        "city": "Algarve", "country": "Portugal", "region": "europe", "type": "beach",
        "themes": ["beaches", "family", "all-inclusive", "water sports", "sun"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 2.8,
        "lat": 37.017, "lon": -7.933,
        "summary": "Golden cliffs and sheltered coves made for easy family beach days.",
        "highlights": [
            "Benagil sea cave with sunlight streaming through its roof",
            "Praia da Marinha's ochre cliffs above clear green water",
            "Grilled piri-piri chicken in a Guia roadside grill",
        ],
    },
    {
        "city": "Tallinn", "country": "Estonia", "region": "europe", "type": "culture",
        "themes": ["culture", "food", "less crowded", "history"],
        "best_seasons": ["spring", "summer", "winter"], "approx_nonstop_hours": 2.9,
        "lat": 59.437, "lon": 24.753,
        "summary": "A fairy-tale medieval old town with a creative, uncrowded edge.",
        "highlights": [
            "Toompea hill viewpoint over red rooftops and church spires",
            "Telliskivi Creative City with the smell of fresh rye bread",
            "Town Hall Square's Christmas market glowing in the snow",
        ],
    },
    {
        "city": "Amsterdam", "country": "Netherlands", "region": "europe", "type": "city",
        "themes": ["museums", "cities", "nightlife", "shopping"],
        "best_seasons": ["spring", "summer"], "approx_nonstop_hours": 1.2,
        "lat": 52.3676, "lon": 4.9041,
        "summary": "Canals, cycling and masterpieces packed into a friendly, walkable centre.",
        "highlights": [
            "Rijksmuseum's Night Watch glowing in its dimmed gallery",
            "A canal cruise past gabled houses draped in wisteria",
            "Stroopwafels pressed fresh at the Albert Cuyp market",
        ],
    },
    {
        "city": "Copenhagen", "country": "Denmark", "region": "europe", "type": "city",
        "themes": ["food", "cities", "architecture", "family"],
        "best_seasons": ["spring", "summer"], "approx_nonstop_hours": 1.9,
        "lat": 55.6761, "lon": 12.5683,
        "summary": "New Nordic dining, harbour swims and design at every turn.",
        "highlights": [
            "Nyhavn's painted townhouses reflected in the still canal",
            "Tivoli Gardens' wooden roller coaster lit by fairy lights",
            "Cardamom buns still warm from a Nørrebro bakery",
        ],
    },
    {
        "city": "Kraków", "country": "Poland", "region": "europe", "type": "culture",
        "themes": ["history", "culture", "nightlife", "food"],
        "best_seasons": ["spring", "summer", "autumn", "winter"], "approx_nonstop_hours": 2.4,
        "lat": 50.0647, "lon": 19.945,
        "summary": "A beautifully preserved old town with cellar bars and hearty food.",
        "highlights": [
            "Rynek Główny square with the bugle call from St Mary's tower",
            "Wieliczka Salt Mine's chapel carved entirely from grey salt",
            "Kazimierz cellar bars with pierogi and cold plum vodka",
        ],
    },
    {
        "city": "Dubrovnik", "country": "Croatia", "region": "europe", "type": "beach",
        "themes": ["beaches", "history", "romance", "water sports"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 2.8,
        "lat": 42.6507, "lon": 18.0944,
        "summary": "Walled old town, Adriatic swims and sea kayaking around Lokrum.",
        "highlights": [
            "Walking the city walls above orange rooftops and blue sea",
            "Sea kayaking to Lokrum island with peacocks in the pines",
            "Banje beach at sunset with the old harbour in view",
        ],
    },
    {
        "city": "Reykjavik", "country": "Iceland", "region": "europe", "type": "nature",
        "themes": ["nature", "wildlife", "photography", "adventure"],
        "best_seasons": ["summer", "winter"], "approx_nonstop_hours": 3.0,
        "lat": 64.1466, "lon": -21.9426,
        "summary": "Geysers, glaciers and northern lights within a day's drive of the capital.",
        "highlights": [
            "Golden Circle's Strokkur geyser erupting in a hiss of steam",
            "Whale watching from the Old Harbour in the midnight sun",
            "Sky Lagoon's milky blue geothermal water under falling snow",
        ],
    },
    {
        "city": "Funchal", "country": "Portugal", "region": "atlantic_islands", "type": "nature",
        "themes": ["hiking", "nature", "food & drink", "relaxation"],
        "best_seasons": ["spring", "summer", "autumn", "winter"], "approx_nonstop_hours": 3.9,
        "lat": 32.6669, "lon": -16.9241,
        "summary": "Levada walks through laurel forest and subtropical gardens by the Atlantic.",
        "highlights": [
            "Levada do Caldeirão Verde trail through dripping laurel forest",
            "Monte Palace gardens with koi ponds and azulejo panels",
            "A glass of Madeira wine in a cool cellar on Rua de Santa Maria",
        ],
    },
    {
        "city": "Bergen", "country": "Norway", "region": "europe", "type": "nature",
        "themes": ["nature", "mountains", "photography", "less crowded"],
        "best_seasons": ["summer"], "approx_nonstop_hours": 1.9,
        "lat": 60.3913, "lon": 5.3221,
        "summary": "Gateway to the fjords, framed by seven mountains and a colourful wharf.",
        "highlights": [
            "Bryggen wharf's wooden warehouses leaning over the harbour",
            "Fløibanen funicular to misty forest trails above the city",
            "A fjord cruise through Osterfjord past roaring waterfalls",
        ],
    },
    {
        "city": "Palermo", "country": "Italy", "region": "europe", "type": "beach",
        "themes": ["food", "markets", "beaches", "history"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 3.0,
        "lat": 38.1157, "lon": 13.3615,
        "summary": "Baroque churches, loud street markets and a beach at Mondello.",
        "highlights": [
            "Ballarò market with sizzling panelle and shouting vendors",
            "Mondello beach's pale sand against Monte Pellegrino",
            "Monreale Cathedral's golden mosaics catching the afternoon light",
        ],
    },
    {
        "city": "Seville", "country": "Spain", "region": "europe", "type": "culture",
        "themes": ["culture", "history", "performing arts", "romance"],
        "best_seasons": ["spring", "autumn", "winter"], "approx_nonstop_hours": 2.6,
        "lat": 37.3891, "lon": -5.9845,
        "summary": "Flamenco, orange blossom and Moorish palaces in Andalucía's capital.",
        "highlights": [
            "Real Alcázar courtyards scented with orange blossom",
            "A flamenco show in a tiny Triana tablao with stamping heels",
            "Plaza de España's tiled alcoves glowing at golden hour",
        ],
    },
    {
        "city": "Valletta", "country": "Malta", "region": "europe", "type": "beach",
        "themes": ["history", "beaches", "water sports", "sun"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 3.1,
        "lat": 35.8989, "lon": 14.5146,
        "summary": "A honey-coloured fortress capital with diving and swims close by.",
        "highlights": [
            "Upper Barrakka Gardens' saluting battery firing at noon",
            "Comino's Blue Lagoon with glass-clear water over white sand",
            "St John's Co-Cathedral and Caravaggio's dramatic Beheading",
        ],
    },
    {
        "city": "Interlaken", "country": "Switzerland", "region": "europe", "type": "nature",
        "themes": ["mountains", "hiking", "adventure", "photography"],
        "best_seasons": ["summer", "winter"], "approx_nonstop_hours": 1.8,
        "lat": 46.6863, "lon": 7.8632,
        "summary": "Between two lakes beneath the Eiger, Mönch and Jungfrau.",
        "highlights": [
            "Harder Kulm viewpoint over turquoise Lake Brienz",
            "Jungfraujoch's ice palace with thin, cold alpine air",
            "Paragliding down to Höhematte meadow with cowbells below",
        ],
    },
    {
        "city": "Budapest", "country": "Hungary", "region": "europe", "type": "city",
        "themes": ["spa", "nightlife", "history", "cities"],
        "best_seasons": ["spring", "autumn", "winter"], "approx_nonstop_hours": 2.5,
        "lat": 47.4979, "lon": 19.0402,
        "summary": "Thermal baths, ruin bars and grand architecture along the Danube.",
        "highlights": [
            "Széchenyi Baths' steaming outdoor pools on a frosty morning",
            "Szimpla Kert ruin bar with mismatched chairs and fairy lights",
            "Fisherman's Bastion at dawn over the Parliament's spires",
        ],
    },
    {
        "city": "Ljubljana", "country": "Slovenia", "region": "europe", "type": "nature",
        "themes": ["nature", "less crowded", "food", "hiking"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 2.1,
        "lat": 46.0569, "lon": 14.5058,
        "summary": "A green, car-free capital an hour from Lake Bled and the Julian Alps.",
        "highlights": [
            "Lake Bled's island church reached by a wooden pletna boat",
            "Vintgar Gorge boardwalks over emerald rapids",
            "Open Kitchen food market by the Triple Bridge on a Friday",
        ],
    },
    {
        "city": "Paphos", "country": "Cyprus", "region": "europe", "type": "beach",
        "themes": ["beaches", "history", "family", "sun"],
        "best_seasons": ["spring", "summer", "autumn"], "approx_nonstop_hours": 4.6,
        "lat": 34.7754, "lon": 32.4245,
        "summary": "Roman mosaics, warm seas and long sunny days well into autumn.",
        "highlights": [
            "Paphos Archaeological Park mosaics glinting in the sun",
            "Aphrodite's Rock with waves foaming against pale cliffs",
            "Coral Bay's soft sand and shallow, warm water",
        ],
    },
]

LONG_HAUL_POOL: List[Dict[str, Any]] = [
    {
        "city": "Dubai", "country": "United Arab Emirates", "region": "middle_east", "type": "city",
        "themes": ["shopping", "beaches", "family", "adventure"],
        "best_seasons": ["autumn", "winter", "spring"], "approx_nonstop_hours": 7.0,
        "lat": 25.2048, "lon": 55.2708,
        "summary": "Winter sun, desert adventures and skyline views on the Gulf.",
        "highlights": [
            "Burj Khalifa's observation deck above a shimmering skyline",
            "Dune bashing at sunset with the smell of desert campfires",
            "Gold and spice souks across the creek by abra boat",
        ],
    },
    {
        "city": "Muscat", "country": "Oman", "region": "middle_east", "type": "nature",
        "themes": ["nature", "culture", "less crowded", "water sports"],
        "best_seasons": ["autumn", "winter"], "approx_nonstop_hours": 7.3,
        "lat": 23.588, "lon": 58.3829,
        "summary": "Rugged mountains, turquoise wadis and a calm, traditional capital.",
        "highlights": [
            "Wadi Shab's emerald pools reached by a short hike and swim",
            "Sultan Qaboos Grand Mosque's vast chandelier and marble courtyards",
            "Mutrah Souq's frankincense smoke drifting through lantern-lit alleys",
        ],
    },
    {
        "city": "Amman", "country": "Jordan", "region": "middle_east", "type": "culture",
        "themes": ["history", "culture", "adventure", "food"],
        "best_seasons": ["spring", "autumn"], "approx_nonstop_hours": 5.5,
        "lat": 31.9539, "lon": 35.9106,
        "summary": "A base for Petra, Wadi Rum and floating in the Dead Sea.",
        "highlights": [
            "Petra's Treasury revealed at the end of the rose-red Siq",
            "Wadi Rum's red dunes under a blaze of desert stars",
            "Amman's Citadel at dusk as the call to prayer echoes",
        ],
    },
    {
        "city": "New York", "country": "United States", "region": "north_america", "type": "city",
        "themes": ["cities", "museums", "food", "shopping", "nightlife"],
        "best_seasons": ["spring", "autumn", "winter"], "approx_nonstop_hours": 7.5,
        "lat": 40.7128, "lon": -74.006,
        "summary": "Museums, Broadway and neighbourhood food scenes that never switch off.",
        "highlights": [
            "The Met's Temple of Dendur bathed in soft window light",
            "Walking the High Line past gardens and art installations",
            "A hot pastrami sandwich piled high at Katz's Delicatessen",
        ],
    },
    {
        "city": "Montreal", "country": "Canada", "region": "north_america", "type": "culture",
        "themes": ["culture", "food", "performing arts", "less crowded"],
        "best_seasons": ["summer", "autumn"], "approx_nonstop_hours": 7.0,
        "lat": 45.5019, "lon": -73.5674,
        "summary": "French-Canadian charm, festivals and bagels from wood-fired ovens.",
        "highlights": [
            "Old Montreal's cobbled streets and Notre-Dame's blue-lit nave",
            "Mount Royal lookout over autumn maples in full colour",
            "Sesame bagels straight from the wood oven at St-Viateur",
        ],
    },
    {
        "city": "Vancouver", "country": "Canada", "region": "north_america", "type": "nature",
        "themes": ["nature", "hiking", "wildlife", "food"],
        "best_seasons": ["summer", "autumn"], "approx_nonstop_hours": 9.5,
        "lat": 49.2827, "lon": -123.1207,
        "summary": "Mountains, rainforest and ocean meet a relaxed, food-loving city.",
        "highlights": [
            "Stanley Park seawall cycle past totem poles and cedar trees",
            "Capilano Suspension Bridge swaying above a mossy canyon",
            "Granville Island market's smoked salmon and fresh berries",
        ],
    },
    {
        "city": "Bridgetown", "country": "Barbados", "region": "caribbean", "type": "beach",
        "themes": ["beaches", "romance", "water sports", "food & drink"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 8.5,
        "lat": 13.0975, "lon": -59.6167,
        "summary": "Powder-soft beaches, rum shacks and turtles in calm west-coast water.",
        "highlights": [
            "Snorkelling with green turtles off Carlisle Bay",
            "Oistins Friday fish fry with flying fish sizzling on grills",
            "Bottom Bay's palm-fringed cove beneath coral cliffs",
        ],
    },
    {
        "city": "St John's", "country": "Antigua and Barbuda", "region": "caribbean", "type": "beach",
        "themes": ["beaches", "sailing", "all-inclusive", "relaxation"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 8.5,
        "lat": 17.1274, "lon": -61.8468,
        "summary": "365 beaches, historic dockyards and sailing in steady trade winds.",
        "highlights": [
            "Nelson's Dockyard with yachts moored beside Georgian stone",
            "Shirley Heights lookout with steel band music at sunset",
            "Half Moon Bay's pink-tinged sand and crashing surf",
        ],
    },
    {
        "city": "Cancún", "country": "Mexico", "region": "central_america", "type": "beach",
        "themes": ["beaches", "all-inclusive", "history", "water sports", "family"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 10.5,
        "lat": 21.1619, "lon": -86.8515,
        "summary": "Caribbean beaches, cenote swims and Maya ruins within an easy drive.",
        "highlights": [
            "Swimming in Cenote Ik Kil beneath hanging vines",
            "Chichén Itzá's El Castillo pyramid in the morning heat",
            "Isla Mujeres' Playa Norte with warm, knee-deep water",
        ],
    },
    {
        "city": "Cape Town", "country": "South Africa", "region": "sub_saharan_africa", "type": "nature",
        "themes": ["nature", "food & drink", "wildlife", "hiking", "beaches"],
        "best_seasons": ["winter", "spring", "autumn"], "approx_nonstop_hours": 11.5,
        "lat": -33.9249, "lon": 18.4241,
        "summary": "Table Mountain, winelands and penguins on a wild, beautiful peninsula.",
        "highlights": [
            "Table Mountain cableway to a plateau of fynbos and fog",
            "Boulders Beach penguins waddling over granite boulders",
            "Stellenbosch wine tasting among vines and Cape Dutch gables",
        ],
    },
    {
        "city": "Nairobi", "country": "Kenya", "region": "sub_saharan_africa", "type": "nature",
        "themes": ["wildlife", "safari", "adventure", "photography"],
        "best_seasons": ["summer", "autumn", "winter"], "approx_nonstop_hours": 8.5,
        "lat": -1.2921, "lon": 36.8219,
        "summary": "A safari gateway with giraffes and rhinos on the city's doorstep.",
        "highlights": [
            "Nairobi National Park rhinos grazing beneath skyscrapers",
            "Giraffe Centre feeding with long purple tongues at eye level",
            "Maasai Mara great migration with dust rising from the plains",
        ],
    },
    {
        "city": "Malé", "country": "Maldives", "region": "indian_ocean", "type": "beach",
        "themes": ["beaches", "romance", "water sports", "spa", "relaxation"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 10.5,
        "lat": 4.1755, "lon": 73.5093,
        "summary": "Overwater villas, house reefs and total switch-off by the lagoon.",
        "highlights": [
            "Snorkelling a house reef with manta rays gliding past",
            "A sandbank picnic surrounded by electric-blue lagoon",
            "Bioluminescent shoreline sparkling on Vaadhoo at night",
        ],
    },
    {
        "city": "Port Louis", "country": "Mauritius", "region": "indian_ocean", "type": "beach",
        "themes": ["beaches", "family", "hiking", "food"],
        "best_seasons": ["autumn", "winter", "spring"], "approx_nonstop_hours": 12.0,
        "lat": -20.1609, "lon": 57.5012,
        "summary": "Lagoon beaches, volcanic peaks and Creole street food.",
        "highlights": [
            "Le Morne Brabant's summit above a turquoise lagoon",
            "Chamarel's seven-coloured earth dunes and waterfall",
            "Port Louis market dholl puri wrapped hot in paper",
        ],
    },
    {
        "city": "Colombo", "country": "Sri Lanka", "region": "south_asia", "type": "culture",
        "themes": ["culture", "wildlife", "beaches", "food", "history"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 10.5,
        "lat": 6.9271, "lon": 79.8612,
        "summary": "Temples, tea country and leopards, all on one compact island.",
        "highlights": [
            "Galle Fort ramparts at sunset with cricket on the green",
            "Ella's Nine Arch Bridge as the blue train curves through tea",
            "Yala National Park leopards lounging on rocky outcrops",
        ],
    },
    {
        "city": "Goa", "country": "India", "region": "south_asia", "type": "beach",
        "themes": ["beaches", "nightlife", "food", "relaxation"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 10.0,
        "lat": 15.2993, "lon": 74.124,
        "summary": "Palm-lined beaches, Portuguese heritage and fragrant seafood curries.",
        "highlights": [
            "Palolem beach's crescent of sand and coconut palms",
            "Fontainhas' pastel Latin Quarter with azulejo house numbers",
            "Anjuna flea market buzzing with spice and silver stalls",
        ],
    },
    {
        "city": "Bangkok", "country": "Thailand", "region": "southeast_asia", "type": "city",
        "themes": ["food", "cities", "nightlife", "markets", "culture"],
        "best_seasons": ["winter", "spring"], "approx_nonstop_hours": 11.5,
        "lat": 13.7563, "lon": 100.5018,
        "summary": "Temples, night markets and some of the world's best street food.",
        "highlights": [
            "Wat Arun's porcelain-studded spire glowing across the river",
            "Yaowarat street food with smoky wok noodles at midnight",
            "A long-tail boat ride through the Thonburi klongs",
        ],
    },
    {
        "city": "Singapore", "country": "Singapore", "region": "southeast_asia", "type": "city",
        "themes": ["food", "family", "cities", "shopping", "nature"],
        "best_seasons": ["spring", "summer", "autumn", "winter"], "approx_nonstop_hours": 13.0,
        "lat": 1.3521, "lon": 103.8198,
        "summary": "Hawker feasts, futuristic gardens and spotless, easy-going neighbourhoods.",
        "highlights": [
            "Gardens by the Bay Supertrees lighting up at dusk",
            "Maxwell hawker centre chicken rice with ginger sauce",
            "Night Safari trams past prowling leopards and tapirs",
        ],
    },
    {
        "city": "Tokyo", "country": "Japan", "region": "east_asia", "type": "culture",
        "themes": ["culture", "food", "cities", "shopping", "history"],
        "best_seasons": ["spring", "autumn"], "approx_nonstop_hours": 14.0,
        "lat": 35.6762, "lon": 139.6503,
        "summary": "Neon districts, quiet shrines and meticulous food at every price.",
        "highlights": [
            "Senso-ji temple's incense smoke drifting through Asakusa",
            "Tsukiji outer market tamagoyaki still warm on a stick",
            "Shibuya Crossing's rush seen from above at night",
        ],
    },
    {
        "city": "Rio de Janeiro", "country": "Brazil", "region": "south_america", "type": "beach",
        "themes": ["beaches", "nightlife", "nature", "photography"],
        "best_seasons": ["autumn", "winter", "spring"], "approx_nonstop_hours": 11.8,
        "lat": -22.9068, "lon": -43.1729,
        "summary": "Iconic beaches, samba nights and rainforest peaks above the city.",
        "highlights": [
            "Sugarloaf cable car as the bay turns gold at sunset",
            "Ipanema beach with caipirinhas and volleyball on the sand",
            "Christ the Redeemer above clouds drifting over Tijuca forest",
        ],
    },
]


def curated_pool(user_hours: float) -> List[Dict[str, Any]]:
    """Short ceilings get the short-haul pool; longer ones get both, long-haul first."""
    if user_hours <= SHORT_HAUL_MAX_HOURS:
        return [dict(record) for record in SHORT_HAUL_POOL]
    return [dict(record) for record in LONG_HAUL_POOL + SHORT_HAUL_POOL]

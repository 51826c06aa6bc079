"""Internal constants shared across the library."""

WORKER_URL = "https://trains.etfnordic.workers.dev/trains"
USER_AGENT = "pytrains/1.0"
EARTH_RADIUS_KM = 6371.0

# ------------------------------------------------------------------
# Product names (canonical display form)
# ------------------------------------------------------------------

PAGATAGEN = "Pågatågen"
VASTTAGEN = "Västtågen"
KROSATAGEN = "Krösatågen"
TIB = "TiB"
SJ_INTERCITY = "SJ InterCity"
SJ_SNABBTAG = "SJ Snabbtåg"
SJ_REGIONAL = "SJ Regional"
X_TAGET = "X-Tåget"
SNALLTAGET = "Snälltåget"
SL_PENDELTAG = "SL Pendeltåg"
NORRTAG = "Norrtåg"
ORESUNDSTAG = "Öresundståg"
MALARTAG = "Mälartåg"
ARLANDA_EXPRESS = "Arlanda Express"

# Lower-cased feed spellings → canonical product name.
CATEGORY_ALIASES: dict[str, str] = {
    "pågatåg": PAGATAGEN,
    "pågatågen": PAGATAGEN,
    "skånetrafiken pågatåg": PAGATAGEN,
    "västtåg": VASTTAGEN,
    "västtågen": VASTTAGEN,
    "krösatåg": KROSATAGEN,
    "krösatågen": KROSATAGEN,
    "tib": TIB,
    "tåg i bergslagen": TIB,
    "sj intercity": SJ_INTERCITY,
    "intercity": SJ_INTERCITY,
    "sj snabbtåg": SJ_SNABBTAG,
    "sj high-speed train": SJ_SNABBTAG,
    "sj regional": SJ_REGIONAL,
    "sj regionaltåg": SJ_REGIONAL,
    "x-tåget": X_TAGET,
    "x-tåg": X_TAGET,
    "snälltåget": SNALLTAGET,
    "snälltåg": SNALLTAGET,
    "sl pendeltåg": SL_PENDELTAG,
    "pendeltåg": SL_PENDELTAG,
    "norrtåg": NORRTAG,
    "öresundståg": ORESUNDSTAG,
    "mälartåg": MALARTAG,
    "arlanda express": ARLANDA_EXPRESS,
}

# ------------------------------------------------------------------
# Plausibility ceilings (km/h) per product
# ------------------------------------------------------------------

DEFAULT_CEILING_KMH = 250.0

SPEED_CEILINGS_KMH: dict[str, float] = {
    PAGATAGEN: 200.0,
    ORESUNDSTAG: 200.0,
    VASTTAGEN: 160.0,
    KROSATAGEN: 160.0,
    TIB: 160.0,
    SJ_INTERCITY: 200.0,
    SJ_SNABBTAG: 200.0,
    SJ_REGIONAL: 200.0,
    MALARTAG: 200.0,
    X_TAGET: 160.0,
    SNALLTAGET: 200.0,
    SL_PENDELTAG: 160.0,
    NORRTAG: 200.0,
    ARLANDA_EXPRESS: 200.0,
}

# SL's feed sends 0 instead of omitting speed when it has no reading.
SPEED_SENTINELS: dict[str, float] = {SL_PENDELTAG: 0.0}

# ------------------------------------------------------------------
# Presentation palette
# ------------------------------------------------------------------

PRODUCT_COLORS: dict[str, str] = {
    PAGATAGEN: "#A855F7",
    VASTTAGEN: "#2563EB",
    KROSATAGEN: "#F59E0B",
    TIB: "#10B981",
    SJ_INTERCITY: "#0EA5E9",
    X_TAGET: "#F97316",
    SNALLTAGET: "#22C55E",
    SL_PENDELTAG: "#0EA5E9",
    NORRTAG: "#F43F5E",
}
DEFAULT_COLOR = "#64748B"

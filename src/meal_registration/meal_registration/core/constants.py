"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

OFFLINE_RECORDS_KEY = "offline_meal_records"
USERS_CACHE_KEY = "offline_users_cache"
USERS_CACHE_EXPIRY_KEY = "offline_users_cache_expiry"
ADMIN_SESSION_KEY = "admin_session"

DEFAULT_SYNC_INTERVAL_SECONDS = 30
DEFAULT_USER_CACHE_TTL_HOURS = 24
DEFAULT_ADMIN_SESSION_HOURS = 24
DEFAULT_RECENT_LIMIT = 5

DEFAULT_GROUP_COLOR = "#3b82f6"
MIN_PASSWORD_LENGTH = 6

VISITOR_SUFFIX = "(Visitante)"
CUSTOM_COMPANY_OPTION = "Minha empresa não está na lista"
VISITOR_COMPANIES = (
    "PETROBRÁS",
    "VALE",
    "BRASKEM",
    "UNIPAR",
    "SABESP",
    "CEMIG",
    "COPEL",
    "ELETROBRAS",
    "CSN",
    "GERDAU",
    "USIMINAS",
    "JBS",
    "BRF",
    "MARFRIG",
    "MINERVA",
    "KLABIN",
    "SUZANO",
    "FIBRIA",
    "ELDORADO",
    "EMBRAER",
    "WEG",
    "RANDON",
    "TUPY",
    "MAHLE",
    "CONTINENTAL",
    "BOSCH",
    "ZF",
    "DANA",
    "EATON",
    "PARKER",
    CUSTOM_COMPANY_OPTION,
)

BRAND_NAME = "RefeiControl"

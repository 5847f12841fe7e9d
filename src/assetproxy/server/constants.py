HEALTH_CHECK_URL = "/health/"

SERVICE_PREFIX = "/ManagerProxy"

LIST_IDENTIFIERS_URL = f"{SERVICE_PREFIX}/ListIdentifiers"
INSTANTIATE_URL = f"{SERVICE_PREFIX}/Instantiate"
DESTROY_URL = f"{SERVICE_PREFIX}/Destroy"
GET_IDENTIFIER_URL = f"{SERVICE_PREFIX}/GetIdentifier"
GET_DISPLAY_NAME_URL = f"{SERVICE_PREFIX}/GetDisplayName"
INITIALIZE_URL = f"{SERVICE_PREFIX}/Initialize"

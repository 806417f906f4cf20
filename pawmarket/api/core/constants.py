API_VERSION_HEADER = "X-PawMarket-Version"

# JWT Configuration
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_COOKIE = "pawmarket_access_token"
REFRESH_TOKEN_COOKIE = "pawmarket_refresh_token"

# Paths that never carry authentication
SKIP_AUTH_PATHS = {
    "/openapi.json",
    "/docs",
    "/redoc",
    "/health",
    "/",
}

# Image uploads
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}

# Pagination
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50

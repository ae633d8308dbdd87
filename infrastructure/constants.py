from pathlib import Path

# Repo-root conventional directories/files (overrideable on the command line)
CONFIG_DIR = Path("configs")
APP_CONFIG_FILE = CONFIG_DIR / "app.yaml"
ENV_FILE = Path(".env")

# Environment variables
MEALIE_TOKEN_ENV = "MEALIE_API_TOKEN"
MEALIE_ADDRESS_ENV = "MEALIE_ADDRESS"

# Mealie client
USER_AGENT = "diet-taxonomy/0.1.0"
MEALIE_RECIPES_ENDPOINT = "/api/recipes"
MEALIE_MAX_PER_PAGE = 100

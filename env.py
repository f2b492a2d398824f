import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Environment variables for Product Transparency API
PORT = int(os.getenv("PORT", 8080))
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# JWT Secret Key
SECRET_KEY = os.getenv("SECRET_KEY", "09d8f7a6b5c4e3d2f1a0b9c8d7e6f5a4")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
# 7 days by default
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

# db url, sqlite file for local development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./transparency.db")

# external AI service, leave empty to always use local fallbacks
AI_SERVICE_URL = os.getenv("AI_SERVICE_URL", "http://localhost:8000")
# timeout in seconds for a single AI call
AI_SERVICE_TIMEOUT = float(os.getenv("AI_SERVICE_TIMEOUT", 5))

# comma separated list of allowed origins
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in CORS_ORIGIN.split(",") if origin.strip()]

IS_DEVELOPMENT = ENVIRONMENT == "development"

# log file level, empty LOG_FILE disables the rotating file
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "transparency_api.log")

# Define Required Environment Variables and show error if not set
required_env_vars = {
    "SECRET_KEY": os.getenv("SECRET_KEY"),
}

# Only enforced in production, development runs on the defaults above
if ENVIRONMENT == "production":
    for var in required_env_vars.keys():
        if required_env_vars[var] is None:
            raise ValueError(f"Environment variable {var} is not set. Please set it in the .env file.")

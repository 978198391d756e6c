"""
Configuration module for the hiring backend.
Centralizes environment variables, logging setup, and constants.
"""
import os
import logging
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

# ============================================================================
# Environment Configuration
# ============================================================================

# Environment identifier (production, staging, development, etc.)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

PORT = int(os.environ.get("PORT", "8080"))

# ============================================================================
# Database Configuration
# ============================================================================

# Required once the pool is first created (see database.get_db_pool)
DATABASE_URL = os.environ.get("DATABASE_URL")

# ============================================================================
# External Service Configuration
# ============================================================================

# Gemini: without a key the test generator always uses the fallback bank
GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
GENERATION_TIMEOUT_SECONDS = float(os.environ.get("GENERATION_TIMEOUT_SECONDS", "20"))

# CV blob storage
CV_UPLOAD_DIR = os.environ.get("CV_UPLOAD_DIR", "./public/uploads/cv")
MAX_CV_SIZE_BYTES = int(os.environ.get("MAX_CV_SIZE_BYTES", str(10 * 1024 * 1024)))

# Reject test submissions after expires_at (otherwise accept and flag them late)
ENFORCE_TEST_DEADLINE = os.environ.get("ENFORCE_TEST_DEADLINE", "false").lower() in ("1", "true", "yes")

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================================================
# Application Constants
# ============================================================================

# Minimum CV score for an application to proceed to the technical test
ADMISSION_THRESHOLD = 75

# Minimum test score for an application to be accepted
PASS_THRESHOLD = 60

TEST_TIME_LIMIT_MINUTES = 30

ALLOWED_CV_CONTENT_TYPES = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}

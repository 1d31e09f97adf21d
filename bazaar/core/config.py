import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SECRET_KEY = os.getenv("SECRET_KEY", "changeme")  # signs the session cookie
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "sinma_session")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "sinma2026")
ADMIN_SESSION_HOURS = int(os.getenv("ADMIN_SESSION_HOURS", "24"))
APP_NAME = os.getenv("APP_NAME", "SINMA BAZAAR")
# idle lifetime of a session id and its server-side values
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(14 * 24 * 60 * 60)))

import os
import tempfile

BACKEND_URL = "http://backend.test/api"
REQUEST_TIMEOUT = 5.0

PLATFORM = "web"
STORAGE_DIR = os.getenv("STORAGE_DIR", os.path.join(tempfile.gettempdir(), "school_portal_test"))
DOWNLOAD_DIR = os.path.join(STORAGE_DIR, "downloads")

SCHOOL_TIMEZONE = "Asia/Kolkata"

UPI_PAYEE_VPA = "school.fees@upi"
UPI_PAYEE_NAME = "Test School"
UPI_NOTE = "Fee Payment"
CURRENCY = "INR"

LOG_LEVEL = "DEBUG"
DEBUG = False
TESTING = True

import os

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000/api")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

# "web" keeps the session in a plain JSON file, "native" in owner-only files
PLATFORM = os.getenv("PLATFORM", "web")
STORAGE_DIR = os.getenv("STORAGE_DIR", ".school_portal")
DOWNLOAD_DIR = os.getenv("DOWNLOAD_DIR", os.path.join(STORAGE_DIR, "downloads"))

SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", "Asia/Kolkata")

UPI_PAYEE_VPA = os.getenv("UPI_PAYEE_VPA", "school.fees@upi")
UPI_PAYEE_NAME = os.getenv("UPI_PAYEE_NAME", "School Fees")
UPI_NOTE = os.getenv("UPI_NOTE", "Fee Payment")
CURRENCY = os.getenv("CURRENCY", "INR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

import os

BACKEND_URL = os.getenv("BACKEND_URL", "")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

PLATFORM = os.getenv("PLATFORM", "native")
STORAGE_DIR = os.getenv("STORAGE_DIR", os.path.join(os.path.expanduser("~"), ".school_portal"))
DOWNLOAD_DIR = os.getenv("DOWNLOAD_DIR", os.path.join(os.path.expanduser("~"), "Downloads"))

SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", "Asia/Kolkata")

UPI_PAYEE_VPA = os.getenv("UPI_PAYEE_VPA", "")
UPI_PAYEE_NAME = os.getenv("UPI_PAYEE_NAME", "")
UPI_NOTE = os.getenv("UPI_NOTE", "Fee Payment")
CURRENCY = os.getenv("CURRENCY", "INR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
DEBUG = False

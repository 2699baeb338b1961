"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Session store keys
AUTH_TOKEN_KEY = "auth_token"
USER_DATA_KEY = "user_data"
ACADEMIC_DATA_KEY = "academic_data"
SESSION_KEYS = (AUTH_TOKEN_KEY, USER_DATA_KEY, ACADEMIC_DATA_KEY)

# Attendance may be marked for today and this many past days
ATTENDANCE_BACKDATE_DAYS = 2

# Stamped into markedBy when the teacher has no email on record
SYSTEM_MARKER = "SYSTEM"

SAVE_ATTENDANCE_LABEL = "Save Attendance"
UPDATE_ATTENDANCE_LABEL = "Update Attendance"

DEFAULT_REQUEST_TIMEOUT = 15
DEFAULT_SCHOOL_TIMEZONE = "Asia/Kolkata"

DEFAULT_CURRENCY = "INR"
DEFAULT_PAYMENT_NOTE = "Fee Payment"
UPI_APP_MODE = "02"
QR_IMAGE_NAME = "upi_qr.png"

# Backend endpoints (PHP-style JSON API)
ENDPOINT_STUDENT_LOGIN = "studentLogin.php"
ENDPOINT_TEACHER_LOGIN = "teacherLogin.php"
ENDPOINT_SESSIONS = "getSessions.php"
ENDPOINT_TEACHER_CLASSES = "getTeacherClasses.php"
ENDPOINT_ROSTER = "getAttendanceData.php"
ENDPOINT_SAVE_ATTENDANCE = "saveAttendanceData.php"
ENDPOINT_STUDENT_ATTENDANCE = "getAttDataBySessStd.php"
ENDPOINT_FEE_SUMMARY = "getStdFee.php"
ENDPOINT_PAYMENT_HISTORY = "getStdPayments.php"
ENDPOINT_SUBMISSION_HISTORY = "getPaymentsSubmission.php"
ENDPOINT_SUBMISSION_CREATE = "paymentSubmission.php"

# paymentMode sent on submission; QR and app payments both settle over UPI
SUBMISSION_PAYMENT_MODE = "UPI"

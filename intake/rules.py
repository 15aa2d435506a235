"""
Submission rules and storage layout.

Kept in one place so validation messages and file formats stay stable.
"""

NAME_MIN_LENGTH = 2
EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

INVALID_NAME_MESSAGE = "invalid name, use at least 2 characters."
INVALID_EMAIL_MESSAGE = "invalid email."
INVALID_JSON_MESSAGE = "invalid JSON body."
INTERNAL_ERROR_MESSAGE = "internal server error."
SUCCESS_MESSAGE = "submission stored."
STATUS_MESSAGE = "API is running."

JSONL_FILENAME = "submissions.jsonl"
CSV_FILENAME = "submissions.csv"
CSV_FIELDS = ("timestamp", "name", "email")
CSV_DELIMITER = ","

# backend/tutorlink/core/constants.py
"""
Shared constants for the TutorLink backend.

Limits here are enforced by services and mirrored in request schemas.
"""

BRAND_NAME = "TutorLink"

# Messaging
MESSAGE_MAX_LENGTH = 2000
CONVERSATION_LIST_DEFAULT_LIMIT = 50
CONVERSATION_LIST_MAX_LIMIT = 100

# Pagination
DEFAULT_PAGE = 1
MAX_PAGE = 10000
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50

# Lessons
UPCOMING_LESSONS_LIMIT = 10

# Profiles
TEACHER_BIO_MAX_LENGTH = 2000
TEACHER_CITY_MAX_LENGTH = 100
STUDENT_FIELD_MAX_LENGTH = 255

# Reviews
REVIEW_COMMENT_MAX_LENGTH = 1000
RATING_MIN = 1
RATING_MAX = 5

# Contact requests
CONTACT_REQUEST_MESSAGE_MAX_LENGTH = 2000

# Availability
DAY_OF_WEEK_MIN = 0
DAY_OF_WEEK_MAX = 6

DEFAULT_SUBJECTS = (
    "Biology",
    "Chemistry",
    "Computer Science",
    "English",
    "French",
    "Geography",
    "History",
    "Mathematics",
    "Music",
    "Physics",
    "Spanish",
)

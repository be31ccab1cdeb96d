"""Centralized constants for the vocato engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Review scheduling ----------
MIN_SRS_STAGE = 0
MAX_SRS_STAGE = 3
# Days until the next review, indexed by the stage reached after answering.
# Stages past the end of the table reuse the last entry.
STAGE_INTERVAL_DAYS = (1, 3, 7)

# ---------- Mastery ----------
MASTERY_ACCURACY_THRESHOLD = 15

# ---------- Study queue ----------
DEFAULT_QUESTION_COUNT = 10

# ---------- Multiple choice ----------
DEFAULT_OPTION_COUNT = 4
POOL_SCAN_LIMIT = 50

# ---------- Auto-play ----------
DEFAULT_AUTO_PLAY_INTERVAL = 3.0  # seconds
MIN_AUTO_PLAY_INTERVAL = 1.0
MAX_AUTO_PLAY_INTERVAL = 10.0
PLAYBACK_DELAY = 1.0  # seconds between speech and the next sub-step

# ---------- Flashcard auto-advance ----------
DEFAULT_AUTO_ADVANCE_SPEED = 2.0  # seconds per card
MIN_AUTO_ADVANCE_SPEED = 1.0
MAX_AUTO_ADVANCE_SPEED = 5.0

# ---------- Stats ----------
RECENT_WORDS_LIMIT = 10
STUDY_SECONDS_KEY_PREFIX = "studySeconds_"

# ---------- Progress snapshot keys ----------
SESSION_PROGRESS_KEY = "StudySessionProgress"
SESSION_CURSOR_KEY = "StudySessionCurrentIndex"

# ---------- Speech ----------
DEFAULT_LEARNING_LANGUAGE = "en"
DEFAULT_SYSTEM_LANGUAGE = "ko"

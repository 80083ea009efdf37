"""
Configuration constants for the Wrestling Meet Manager.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# API server configuration
API_HOST = os.getenv("WRESTLING_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("WRESTLING_API_PORT", "8000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("WRESTLING_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("WRESTLING_LOG_LEVEL", "INFO").upper()

# Match timing
PERIOD_DURATION_SECONDS = int(os.getenv("WRESTLING_PERIOD_DURATION_SECONDS", "180"))

# Weigh-ins
KG_TO_LBS = 2.20462
WEIGHT_UNITS = ["lbs", "kg"]
NO_WEIGHT_CLASS = "No Weight Class"

# Scoring actions and their default points
SCORING_ACTIONS = {
    "escape": 1,
    "takedown": 2,
    "reversal": 2,
    "near_fall": 2,
    "penalty": 1,
    "pin": 6,
}

# Team points awarded for a win (dual meet scoring)
TEAM_POINTS = {
    "pin": 6,
    "technical_fall": 6,
    "forfeit": 6,
    "major_decision": 5,
    "decision": 3,
    "other": 3,
}
MAJOR_DECISION_MARGIN = 7  # Margin must exceed this for a major decision

# Weight classes by grade level (pounds)
WEIGHT_CLASSES_BY_GRADE = {
    "k-2": [40, 45, 50, 55, 60, 65, 70, 75, 80, 85, 90, 95, 100, 105, 110],
    "3-4": [50, 55, 60, 65, 70, 75, 80, 85, 90, 95, 100, 105, 110, 115, 120, 125, 130],
    "5-6": [60, 65, 70, 75, 80, 85, 90, 95, 100, 105, 110, 115, 120, 125, 130, 135, 140, 145],
    "7-8": [70, 75, 80, 85, 90, 95, 100, 105, 110, 115, 120, 125, 130, 135, 140, 145, 150, 155, 160, 165],
    "high-school": [106, 113, 120, 126, 132, 138, 144, 150, 157, 165, 175, 190, 215, 285],
    "college": [125, 133, 141, 149, 157, 165, 174, 184, 197, 285],
    "senior": [57, 61, 65, 70, 74, 79, 86, 92, 97, 125],
}

GRADE_LEVELS = list(WEIGHT_CLASSES_BY_GRADE.keys())
DEFAULT_GRADE_LEVEL = os.getenv("WRESTLING_DEFAULT_GRADE_LEVEL", "high-school")

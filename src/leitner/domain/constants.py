"""Centralized constants for leitner.

Fixed strings and scoring tables live here so every layer
imports from a single source of truth.
"""

# ---------- Hints ----------
HINT_PREFIX = "Think about the key concepts related to "

# ---------- Progress reporting ----------
# Score per AnswerDifficulty name, used for average difficulty.
DIFFICULTY_SCORES = {"EASY": 1.0, "HARD": 0.5, "WRONG": 0.0}

# ---------- Configuration ----------
ENV_PREFIX = "LEITNER_"
# Relative to the user's home directory, checked in order.
CONFIG_FILE_NAMES = [".config/leitner/config.toml", ".leitner.toml"]

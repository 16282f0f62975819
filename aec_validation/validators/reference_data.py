"""Reference data — vocabularies and phrase patterns the rule-based validators match against.

This is the encoded reviewing knowledge that makes validation deterministic.
All matching is case-insensitive.
"""

import re

# ──────────────────────────────────────────────────────────────────────
# TESTABILITY
# ──────────────────────────────────────────────────────────────────────

MEASURABLE_KEYWORDS: list[str] = [
    "when", "then", "should", "must", "can", "will",
    "displays", "shows", "returns", "creates", "updates", "deletes",
    "validates", "allows", "prevents", "redirects", "sends",
]

VAGUE_WORDS: list[str] = [
    "better", "improved", "good", "nice", "clean", "properly",
    "correctly", "well", "appropriately", "reasonable",
]

TESTABLE_TICKET_TYPES: set[str] = {"feature", "bug"}


# ──────────────────────────────────────────────────────────────────────
# FEASIBILITY — claims no real system can honour
# ──────────────────────────────────────────────────────────────────────

IMPOSSIBILITY_PATTERNS: list[re.Pattern] = [
    re.compile(r"real[- ]?time.*100%.*uptime", re.IGNORECASE),
    re.compile(r"infinite.*storage", re.IGNORECASE),
    re.compile(r"zero.*latency", re.IGNORECASE),
    re.compile(r"instant.*processing", re.IGNORECASE),
    re.compile(r"unlimited.*concurrent", re.IGNORECASE),
]


# ──────────────────────────────────────────────────────────────────────
# CONSISTENCY
# ──────────────────────────────────────────────────────────────────────

# Terms that should not both appear anywhere in one ticket
CONTRADICTORY_TERMS: list[tuple[str, str]] = [
    ("always", "never"),
    ("must", "optional"),
    ("required", "optional"),
    ("public", "private"),
    ("read-only", "editable"),
]

# Verbs that contradict each other when split across two acceptance criteria
OPPOSITE_VERBS: list[tuple[str, str]] = [
    ("enable", "disable"),
    ("show", "hide"),
    ("allow", "prevent"),
    ("create", "delete"),
]


# ──────────────────────────────────────────────────────────────────────
# SCOPE — language suggesting more than one ticket's worth of work
# ──────────────────────────────────────────────────────────────────────

BROAD_SCOPE_PATTERNS: list[re.Pattern] = [
    re.compile(r"entire.*system", re.IGNORECASE),
    re.compile(r"all.*modules", re.IGNORECASE),
    re.compile(r"complete.*refactor", re.IGNORECASE),
    re.compile(r"redesign.*everything", re.IGNORECASE),
    re.compile(r"migrate.*all", re.IGNORECASE),
]

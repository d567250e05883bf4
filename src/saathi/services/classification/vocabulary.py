"""
Risk Vocabulary

Phrase lists and immediate-risk constructions used by the lexical
scorer. English and Latin-script (transliterated) Hindi are mixed in
the same lists; no language detection is performed.

CLINICAL_REVIEW_REQUIRED: Every list here should be reviewed by
counsellors fluent in both languages before changes ship.

All phrases must be lowercase. Matching is plain substring search on
the lowercased transcript, so short phrases also match inside longer
words ("sad" matches "sadness").
"""

import re

from saathi.domain.enums.risk_level import TierName


CRITICAL_SEVERE_TERMS: tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end my life",
    "i want to die",
    "hang myself",
    "take my own life",
    # Hindi
    "marna chahta hun",
    "jaan dena",
    "suicide karna",
)

SEVERE_PLAN_TERMS: tuple[str, ...] = (
    "jump off",
    "overdose",
    "self harm",
    "self-harm",
    "cut myself",
    "razor blade",
    "poison myself",
    "gun to my head",
    "bought a rope",
    "bought pills",
    "wrote a note",
)

HIGH_TERMS: tuple[str, ...] = (
    "i am going to",
    "i have a plan",
    "goodbye forever",
    "can't go on",
    "hopeless",
    "life is meaningless",
    "nothing matters",
    "give up completely",
    "no way out",
    "trapped forever",
    "can't escape",
    "ready to go",
    "final decision",
    "said goodbye",
    "planning to end",
    "going to jump",
    "no reason to live",
    "better off dead",
    # Hindi
    "koi raah nahi",
    "umeed khatam",
    "plan bana liya",
    "alvida keh diya",
    "bass khatam",
    "zindagi khatam",
)

MEDIUM_TERMS: tuple[str, ...] = (
    "depressed",
    "depression",
    "anxious",
    "panic",
    "can't sleep",
    "lost interest",
    "crying a lot",
    "worthless",
    "feeling empty",
    "numb inside",
    "constant pain",
    "overwhelming sadness",
    "can't cope",
    "breaking down",
    "lost control",
    "spiraling",
    "dark thoughts",
    "intrusive thoughts",
    "mental breakdown",
    "emotional pain",
    # Hindi
    "pareshan hun",
    "depression hai",
    "udaas hun",
    "ro raha hun",
    "kuch samajh nahi aa raha",
    "pareshani hai",
    "anxiety hai",
    "ghabrat hai",
    "dukh hai",
)

LOW_TERMS: tuple[str, ...] = (
    "stressed",
    "sad",
    "lonely",
    "down",
    "upset",
    "tired of everything",
    "frustrated",
    "annoyed",
    "irritated",
    "fed up",
    "overwhelmed",
    "exhausted",
    "burned out",
    "bothered",
    "disappointed",
    "discouraged",
    "moody",
    "grumpy",
    # Hindi
    "pareshaan",
    "gussa",
    "tension",
    "thak gaya",
    "bore ho gaya",
    "irritate ho raha",
    "tang aa gaya",
    "dimag kharab",
    "stress hai",
)

# Heaviest first; scan order and evidence order follow this sequence
TIER_TERMS: dict[TierName, tuple[str, ...]] = {
    TierName.CRITICAL_SEVERE: CRITICAL_SEVERE_TERMS,
    TierName.SEVERE_PLAN: SEVERE_PLAN_TERMS,
    TierName.HIGH: HIGH_TERMS,
    TierName.MEDIUM: MEDIUM_TERMS,
    TierName.LOW: LOW_TERMS,
}

# Syntactic constructions that fixed phrases miss.
# Each match is counted once, as CRITICAL_SEVERE evidence.
IMMEDIATE_RISK_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    (
        "first_person_self_harm",
        re.compile(
            r"\bi(?:\s+am|'m)?\s+going\s+to\s+(?:kill|end|hurt|harm)\s+my"
            r"|\bi(?:\s+will|'ll)\s+(?:kill|end|hurt|harm)\s+my",
            re.IGNORECASE,
        ),
    ),
    (
        "tonight_intent",
        re.compile(r"\btonight\s+(?:i|will|going)\b", re.IGNORECASE),
    ),
    (
        "plan_to_die",
        re.compile(r"\b(?:plan|planning)\s+to\s+(?:die|kill|end)\b", re.IGNORECASE),
    ),
    (
        "ready_to_die",
        re.compile(r"\b(?:ready|prepared)\s+to\s+(?:die|go|leave)\b", re.IGNORECASE),
    ),
    (
        "going_to_jump_or_hang",
        re.compile(r"\bgoing\s+to\s+(?:jump|hang)\b", re.IGNORECASE),
    ),
)

DEFAULT_TIER_WEIGHTS: dict[TierName, int] = {
    TierName.CRITICAL_SEVERE: 8,
    TierName.SEVERE_PLAN: 6,
    TierName.HIGH: 3,
    TierName.MEDIUM: 2,
    TierName.LOW: 1,
}

DEFAULT_PATTERN_WEIGHT: int = 10

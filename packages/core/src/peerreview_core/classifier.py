"""Keyword-weighted review type detection.

The keyword table is plain data so the scoring rules can be read and tested
without touching discovery or the network. Only used when the caller did not
pass an explicit review type.
"""

from __future__ import annotations

import re

from peerreview_core.registry import DEFAULT_REVIEW_TYPE, REVIEW_TYPE_MODELS

# A type needs strictly more than this many keyword hits to win. A single
# stray "test" in a comment should not turn a generic document into a test
# review.
SIGNIFICANCE_THRESHOLD = 2


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


TYPE_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "security": _compile(
        r"\bsecurity\b",
        r"\bauth(?:entication|orization)?\b",
        r"\bvulnerabilit(?:y|ies)\b",
        r"\binjection\b",
        r"\bxss\b",
        r"\bcsrf\b",
        r"\bpermissions?\b",
        r"\bcredentials?\b",
        r"\bencrypt(?:ion|ed)?\b",
        r"\btokens?\b",
        r"\boauth\b",
        r"\bjwt\b",
    ),
    "architecture": _compile(
        r"\barchitecture\b",
        r"\bdesign\s*pattern\b",
        r"\bstructure\b",
        r"\bscalab(?:le|ility)\b",
        r"\bmicroservices?\b",
        r"\bmonolith\b",
        r"\bcomponents?\b",
        r"\bmodules?\b",
        r"\blayers?\b",
        r"\bdependenc(?:y|ies)\b",
    ),
    "bug": _compile(
        r"\bbugs?\b",
        r"\bfix(?:es|ed|ing)?\b",
        r"\berrors?\b",
        r"\bexceptions?\b",
        r"\bcrash(?:es|ed|ing)?\b",
        r"\bissues?\b",
        r"\bbroken\b",
        r"\bfailing\b",
        r"\bnull\b",
        r"\bundefined\b",
        r"\brace\s*condition\b",
    ),
    "performance": _compile(
        r"\bperformance\b",
        r"\boptimiz(?:e|ation|ed|ing)\b",
        r"\bslow\b",
        r"\bfast(?:er)?\b",
        r"\bmemory\b",
        r"\bcach(?:e|ing|ed)\b",
        r"\blatency\b",
        r"\bthroughput\b",
        r"\bbottleneck\b",
        r"\befficient\b",
        r"\bcomplexity\b",
    ),
    "api": _compile(
        r"\bapi\b",
        r"\bendpoints?\b",
        r"\brest(?:ful)?\b",
        r"\bgraphql\b",
        r"\brequests?\b",
        r"\bresponses?\b",
        r"\broutes?\b",
        r"\bhandlers?\b",
        r"\bmiddleware\b",
        r"\bcontracts?\b",
    ),
    "test": _compile(
        r"\btests?\b",
        r"\bspec\b",
        r"\bcoverage\b",
        r"\bmocks?\b",
        r"\bstubs?\b",
        r"\bassert(?:ions?)?\b",
        r"\bexpect\b",
        r"\bjest\b",
        r"\bvitest\b",
        r"\bpytest\b",
        r"\bunit\s*tests?\b",
        r"\bintegration\b",
    ),
}


def score(content: str) -> dict[str, int]:
    """Return the keyword weight of every registered review type.

    Types without a keyword table (the catch-all) always score zero.
    """
    weights: dict[str, int] = {}
    for review_type in REVIEW_TYPE_MODELS:
        patterns = TYPE_PATTERNS.get(review_type, ())
        weights[review_type] = sum(len(p.findall(content)) for p in patterns)
    return weights


def classify(content: str) -> str:
    """Pick the review type for ``content``.

    Highest weight wins, ties go to the alphabetically first type name, and
    anything at or below SIGNIFICANCE_THRESHOLD falls back to the default.
    """
    ranked = sorted(score(content).items(), key=lambda item: (-item[1], item[0]))
    if ranked and ranked[0][1] > SIGNIFICANCE_THRESHOLD:
        return ranked[0][0]
    return DEFAULT_REVIEW_TYPE

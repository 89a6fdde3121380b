"""8-dimension scorer.

Pure-local scorer. Each dimension produces a 0-1 score using keyword
matching (substring + regex), structural analysis, and numeric heuristics.
Works on Chinese, English and mixed text.
"""

import math
import re
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .keywords import COMPILED_KEYWORDS, CompiledEntry, find_in_order
from .types import DEFAULT_WEIGHTS, Dimension, DimensionScore

# Creativity is dampened to this fraction when the message is about code
CODE_CONTEXT_CREATIVITY_FACTOR = 0.15

# Short tech mentions below this length are halved unless complexity shows
SHORT_TECH_MAX_CHARS = 60
SHORT_TECH_FACTOR = 0.5


# =============================================================================
# Utilities
# =============================================================================


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def lerp(x0: float, x1: float, y0: float, y1: float, x: float) -> float:
    """Linear interpolation of x over [x0, x1] onto [y0, y1].

    A degenerate range (x0 == x1) returns y0.
    """
    if x1 == x0:
        return y0
    return y0 + ((x - x0) / (x1 - x0)) * (y1 - y0)


# =============================================================================
# Keyword aggregation
# =============================================================================


def score_keywords(lower: str, entries: Sequence[CompiledEntry]) -> float:
    """Aggregate keyword matches for a single dimension.

    Soft-max: score = 1 - prod(1 - w_i) over matched entries, which
    saturates towards 1 without hard clipping.

    Args:
        lower: Lower-cased message
        entries: Compiled (weight, matcher) pairs for one dimension

    Returns:
        Aggregated score in [0, 1]
    """
    complement = 1.0
    for weight, matches in entries:
        if matches(lower):
            complement *= 1.0 - weight
    return 1.0 - complement


# =============================================================================
# Length
# =============================================================================

# (upper bound in chars, score at lower bound, score at upper bound)
_LENGTH_PIECES = (
    (0, 10, 0.00, 0.05),
    (10, 50, 0.05, 0.25),
    (50, 150, 0.25, 0.50),
    (150, 500, 0.50, 0.75),
    (500, 2000, 0.75, 0.90),
)


def score_length(message: str) -> float:
    """Map character count to a 0-1 complexity signal.

    Piecewise linear up to 2000 characters, then an asymptotic approach
    to 1.0.
    """
    length = len(message)
    for x0, x1, y0, y1 in _LENGTH_PIECES:
        if length <= x1:
            return lerp(x0, x1, y0, y1, length)
    return 0.90 + 0.10 * (1.0 - math.exp(-(length - 2000) / 3000))


# =============================================================================
# Structural heuristics
# =============================================================================

_CJK_SEPARATORS = re.compile(r"[，、；]")
_NUMBERED_ITEM = re.compile(r"\d+[.)]")
_SENTENCE_END = re.compile(r"[。！？.!?]")
_BULLET_MARKERS = ("-", "*", "•")


def score_structural_steps(message: str) -> float:
    """Detect multi-step structure from punctuation and list markers."""
    score = 0.0

    cjk_separators = len(_CJK_SEPARATORS.findall(message))
    if cjk_separators >= 3:
        score += 0.3
    elif cjk_separators >= 1:
        score += 0.15

    if message.count(",") >= 3:
        score += 0.2

    # List markers count only at the start of a line, after leading whitespace
    lines = [line.lstrip() for line in message.split("\n")]

    if sum(1 for line in lines if _NUMBERED_ITEM.match(line)) >= 2:
        score += 0.4

    if len(_SENTENCE_END.findall(message)) >= 3:
        score += 0.25

    if sum(1 for line in lines if line.startswith(_BULLET_MARKERS)) >= 2:
        score += 0.3

    return clamp(score)


_QUESTION_MARK = re.compile(r"[？?]")
_REASONING_SIGNALS = (
    # CJK interrogatives
    (re.compile(r"怎么样|什么|怎么|如何|哪个|哪些|多少|几个|是否|能否|可以吗"), 0.10),
    (re.compile(r"\b(what|how|which|where|when|who)\b", re.IGNORECASE | re.ASCII), 0.08),
    # Conditionals
    (re.compile(r"如果|假如|假设|若是|if\s|suppose|assuming|given\sthat", re.IGNORECASE), 0.25),
    # Comparatives
    (re.compile(r"比较|对比|区别|差异|优缺点|versus|vs\.?|compared?\sto|differ", re.IGNORECASE), 0.30),
    # Causal connectives
    (re.compile(r"因为|所以|导致|由于|因此|therefore|because|hence|thus|consequently", re.IGNORECASE), 0.25),
    # Request markers
    (re.compile(r"帮我|请|麻烦"), 0.05),
)


def score_reasoning_structure(lower: str) -> float:
    """Detect reasoning complexity from question structure and connectives."""
    score = 0.0

    question_marks = len(_QUESTION_MARK.findall(lower))
    if question_marks >= 3:
        score += 0.40
    elif question_marks >= 2:
        score += 0.25
    elif question_marks >= 1:
        score += 0.10

    for pattern, bonus in _REASONING_SIGNALS:
        if pattern.search(lower):
            score += bonus

    return clamp(score)


_PRONOUN_REFERENCE = re.compile(r"这个|那个|它|this|that|these|those|it\s", re.IGNORECASE)
_ABOVE_REFERENCE = re.compile(r"上面|上述|前述|上文|aforementioned|the\s+above", re.IGNORECASE)


def score_context_signals(lower: str) -> float:
    """Detect context dependency from pronouns and back-references."""
    score = 0.0
    if _PRONOUN_REFERENCE.search(lower):
        score += 0.2
    if _ABOVE_REFERENCE.search(lower):
        score += 0.4
    return clamp(score)


def _has_topic_phrase(lower: str) -> bool:
    # "关于...的" with at least two characters in between, on one line
    for line in lower.split("\n"):
        start = line.find("关于")
        if start >= 0 and line.find("的", start + 4) >= 0:
            return True
    return False


_CREATIVE_SIGNALS = (
    (re.compile(r"帮我写|写一[篇个首段]|帮我创作|帮我起名").search, 0.40),
    # "关于...的" topical writing
    (_has_topic_phrase, 0.25),
    (re.compile(r"write\s+(a|an|me|the)\b", re.IGNORECASE | re.ASCII).search, 0.35),
    # Word-count specification
    (re.compile(r"\d\s*字|字左右|\d\s*words?", re.IGNORECASE).search, 0.20),
)


def score_creative_request(lower: str) -> float:
    """Detect creative writing requests from phrasing patterns."""
    score = 0.0
    for matches, bonus in _CREATIVE_SIGNALS:
        if matches(lower):
            score += bonus
    return clamp(score)


_CODE_CONTEXT = (
    re.compile(
        r"\b(python|javascript|typescript|golang|rust|sql|docker|kubernetes"
        r"|react|vue|node\.js|bash|shell|script|function|code|class|api)\b",
        re.IGNORECASE | re.ASCII,
    ),
    re.compile(r"```"),
    re.compile(r"代码|函数|脚本|爬虫|程序|接口"),
    re.compile(r"\.(py|js|ts|tsx|jsx|go|rs|java|cpp|c|h|rb|php|sh|sql)\b", re.IGNORECASE | re.ASCII),
)


def has_code_context(lower: str) -> bool:
    """Whether the message is independently about code or tooling."""
    return any(pattern.search(lower) for pattern in _CODE_CONTEXT)


_ARCHITECTURE_NOUNS = re.compile(
    r"系统|架构|微服务|分布式|architecture|system|microservice|distributed|infrastructure",
    re.IGNORECASE,
)
_LIST_SEPARATORS = re.compile(r"[，、；,]")
# Ordered step chains, matched anywhere in the message (across lines)
_STEP_CHAINS = (
    ("first", "then", "finally"),
    ("首先", "然后", "最后"),
    ("先", "再", "最后"),
)


def has_complexity_signal(lower: str) -> bool:
    """Whether a message shows complexity beyond a bare tech mention."""
    if _ARCHITECTURE_NOUNS.search(lower):
        return True
    if len(_LIST_SEPARATORS.findall(lower)) >= 2:
        return True
    return any(find_in_order(lower, chain) for chain in _STEP_CHAINS)


# =============================================================================
# Per-dimension raw scores
# =============================================================================


def _keywords(dimension: Dimension) -> Callable[[str, str], float]:
    def scorer(message: str, lower: str) -> float:
        return score_keywords(lower, COMPILED_KEYWORDS[dimension])

    return scorer


def _score_reasoning(message: str, lower: str) -> float:
    return max(
        score_keywords(lower, COMPILED_KEYWORDS[Dimension.REASONING]),
        score_reasoning_structure(lower),
    )


def _score_code_tech(message: str, lower: str) -> float:
    raw = score_keywords(lower, COMPILED_KEYWORDS[Dimension.CODE_TECH])
    if raw > 0 and len(message) < SHORT_TECH_MAX_CHARS and not has_complexity_signal(lower):
        raw *= SHORT_TECH_FACTOR
    return raw


def _score_task_steps(message: str, lower: str) -> float:
    return max(
        score_keywords(lower, COMPILED_KEYWORDS[Dimension.TASK_STEPS]),
        score_structural_steps(message),
    )


def _score_creativity(message: str, lower: str) -> float:
    raw = max(
        score_keywords(lower, COMPILED_KEYWORDS[Dimension.CREATIVITY]),
        score_creative_request(lower),
    )
    if raw > 0 and has_code_context(lower):
        raw *= CODE_CONTEXT_CREATIVITY_FACTOR
    return raw


def _score_context_depend(message: str, lower: str) -> float:
    return max(
        score_keywords(lower, COMPILED_KEYWORDS[Dimension.CONTEXT_DEPEND]),
        score_context_signals(lower),
    )


def _score_message_length(message: str, lower: str) -> float:
    return score_length(message)


_DIMENSION_SCORERS: Dict[Dimension, Callable[[str, str], float]] = {
    Dimension.REASONING: _score_reasoning,
    Dimension.CODE_TECH: _score_code_tech,
    Dimension.TASK_STEPS: _score_task_steps,
    Dimension.DOMAIN_EXPERT: _keywords(Dimension.DOMAIN_EXPERT),
    Dimension.OUTPUT_COMPLEX: _keywords(Dimension.OUTPUT_COMPLEX),
    Dimension.CREATIVITY: _score_creativity,
    Dimension.CONTEXT_DEPEND: _score_context_depend,
    Dimension.MESSAGE_LENGTH: _score_message_length,
}


def score_dimension(dimension: Dimension, message: str) -> float:
    """Raw score for one dimension, clamped to [0, 1]."""
    return clamp(_DIMENSION_SCORERS[dimension](message, message.lower()))


def score_dimensions(
    message: str,
    weights: Optional[Mapping[Dimension, float]] = None,
) -> List[DimensionScore]:
    """Score a message across all 8 dimensions.

    Args:
        message: Raw user message
        weights: Effective weight map; missing entries use the default weight

    Returns:
        One DimensionScore per Dimension, in Dimension order
    """
    weights = weights if weights is not None else DEFAULT_WEIGHTS
    lower = message.lower()

    scores = []
    for dimension in Dimension:
        raw = clamp(_DIMENSION_SCORERS[dimension](message, lower))
        weight = weights.get(dimension, DEFAULT_WEIGHTS[dimension])
        scores.append(
            DimensionScore(
                dimension=dimension,
                raw=raw,
                weight=weight,
                weighted=clamp(raw * weight),
            )
        )
    return scores

"""Hard-rule overrides evaluated before dimension scoring.

Rules run in a fixed order and the first match wins. A matching rule
decides the tier outright; the scorer is never consulted.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .types import OverrideResult, Tier

# A rule test returns False/None for no match, True for a plain match,
# or a string detail (e.g. the matched phrase) to embed in the rule id.
RuleTest = Callable[[str], Union[bool, str, None]]

TECH_TOKENS: Tuple[str, ...] = (
    "api", "sql", "css", "html", "http", "json", "yaml", "xml",
    "bug", "git", "npm", "pip", "ssh", "tcp", "udp", "url",
    "dns", "jwt", "rpc", "sdk", "ide", "cli", "gpu", "cpu",
    "代码", "函数", "算法", "编程", "调试", "接口", "数据库",
    "code", "func", "def", "var", "let", "int",
)

EXPERT_PHRASES: Tuple[str, ...] = (
    "系统设计", "架构设计", "从零搭建",
    "system design", "architecture design", "build from scratch",
    "系统架构", "整体架构", "技术方案设计",
    "design a system", "design the architecture",
)

CODE_FENCE = "```"
SHORT_MESSAGE_MAX_CHARS = 5
MIN_FENCES_FOR_COMPLEX = 3


@dataclass(frozen=True)
class OverrideRule:
    """One hard rule: a test and the tier it forces.

    Attributes:
        rule_id: Identifier reported in ScoreResult.override_applied
        tier: Tier forced when the test matches
        test: Predicate over the raw message
    """

    rule_id: str
    tier: Tier
    test: RuleTest

    def apply(self, message: str) -> Optional[OverrideResult]:
        outcome = self.test(message)
        if not outcome:
            return None
        if isinstance(outcome, str):
            return OverrideResult(tier=self.tier, rule=f'{self.rule_id} ("{outcome}")')
        return OverrideResult(tier=self.tier, rule=self.rule_id)


def has_tech_token(message: str) -> bool:
    """Quick check for common tech tokens (case-insensitive substring)."""
    lower = message.lower()
    return any(token in lower for token in TECH_TOKENS)


def count_code_fences(message: str) -> int:
    """Count raw triple-backtick markers, opening and closing alike."""
    return message.count(CODE_FENCE)


def _is_short_nontechnical(message: str) -> bool:
    stripped = "".join(message.split())
    return len(stripped) <= SHORT_MESSAGE_MAX_CHARS and not has_tech_token(message)


def _has_multiple_code_blocks(message: str) -> bool:
    return count_code_fences(message) >= MIN_FENCES_FOR_COMPLEX


def _find_expert_phrase(message: str) -> Optional[str]:
    lower = message.lower()
    for phrase in EXPERT_PHRASES:
        if phrase.lower() in lower:
            return phrase
    return None


OVERRIDE_RULES: Tuple[OverrideRule, ...] = (
    OverrideRule("short_nontechnical (≤5 chars)", Tier.TRIVIAL, _is_short_nontechnical),
    OverrideRule("multiple_code_blocks (≥3 fences)", Tier.COMPLEX, _has_multiple_code_blocks),
    OverrideRule("expert_keyword", Tier.EXPERT, _find_expert_phrase),
)


def check_override(
    message: str,
    rules: Tuple[OverrideRule, ...] = OVERRIDE_RULES,
) -> Optional[OverrideResult]:
    """Evaluate hard-rule overrides against a raw message.

    Args:
        message: Raw user message
        rules: Ordered rules to evaluate (first match wins)

    Returns:
        OverrideResult for the first matching rule, or None
    """
    for rule in rules:
        result = rule.apply(message)
        if result is not None:
            return result
    return None

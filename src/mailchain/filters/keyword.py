"""
Keyword-based filtering for messages.

Filters messages based on keywords in their body. Supports inclusion and
exclusion lists with plain or regex matching.
"""

import re
from typing import Any, Dict, List, Optional, Pattern

from mailchain.filters.base import Filter, FilterResult
from mailchain.message import Message


class KeywordFilter(Filter):
    """
    Filter messages based on keywords in the body.

    Configuration options:
    - keywords_include: Keywords of which at least one must be present
    - keywords_exclude: Keywords that must not be present
    - case_sensitive: Whether matching is case-sensitive (default: False)
    - regex_mode: Whether keywords are regex patterns (default: False)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.keywords_include: List[str] = self.config.get('keywords_include') or []
        self.keywords_exclude: List[str] = self.config.get('keywords_exclude') or []
        self.case_sensitive: bool = self.config.get('case_sensitive', False)
        self.regex_mode: bool = self.config.get('regex_mode', False)

        errors = self.validate_config()
        if errors:
            raise ValueError(f"Invalid keyword filter configuration: {'; '.join(errors)}")

        self._include_patterns = [self._compile(k) for k in self.keywords_include]
        self._exclude_patterns = [self._compile(k) for k in self.keywords_exclude]

    @property
    def name(self) -> str:
        return "Keyword Filter"

    @property
    def description(self) -> str:
        criteria = []
        if self.keywords_include:
            criteria.append(f"must include: {', '.join(self.keywords_include[:3])}" +
                            ("..." if len(self.keywords_include) > 3 else ""))
        if self.keywords_exclude:
            criteria.append(f"must exclude: {', '.join(self.keywords_exclude[:3])}" +
                            ("..." if len(self.keywords_exclude) > 3 else ""))
        if not criteria:
            return "No keyword filtering (all messages pass)"
        return f"body {', '.join(criteria)}"

    def validate_config(self) -> List[str]:
        errors = []
        for key in ('keywords_include', 'keywords_exclude'):
            value = self.config.get(key) or []
            if not isinstance(value, list) or not all(isinstance(k, str) for k in value):
                errors.append(f"'{key}' must be a list of strings")
            elif self.config.get('regex_mode', False):
                for pattern in value:
                    try:
                        re.compile(pattern)
                    except re.error as e:
                        errors.append(f"invalid pattern '{pattern}': {e}")
        return errors

    def apply(self, message: Message) -> FilterResult:
        body = message.body

        for pattern in self._exclude_patterns:
            if pattern.search(body):
                return FilterResult(
                    passed=False,
                    reason=f"body contains excluded keyword '{pattern.pattern}'",
                    metadata={'excluded_match': pattern.pattern}
                )

        if self._include_patterns:
            for pattern in self._include_patterns:
                if pattern.search(body):
                    return FilterResult(
                        passed=True,
                        reason=f"body contains keyword '{pattern.pattern}'",
                        metadata={'included_match': pattern.pattern}
                    )
            return FilterResult(passed=False, reason="body contains none of the required keywords")

        return FilterResult(passed=True, reason="no excluded keywords found")

    def _compile(self, keyword: str) -> Pattern[str]:
        flags = 0 if self.case_sensitive else re.IGNORECASE
        return re.compile(keyword if self.regex_mode else re.escape(keyword), flags)

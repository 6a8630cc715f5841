"""
Address-based filtering for messages.

Matches the sender or recipient address against an allow list or a
regular expression.
"""

import re
from typing import Any, Dict, List, Optional

from mailchain.filters.base import Filter, FilterResult
from mailchain.message import Message


class AddressFilter(Filter):
    """
    Filter messages on one address field.

    Configuration options:
    - addresses: Addresses that pass (a single string is accepted too)
    - pattern: Regular expression the address must match (alternative to addresses)
    - case_sensitive: Whether matching is case-sensitive (default: False)
    - exclude: Invert the match so listed addresses are rejected (default: False)
    """

    field_name = "sender"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        addresses = self.config.get('addresses') or []
        if isinstance(addresses, str):
            addresses = [addresses]
        self.addresses: List[str] = addresses
        self.pattern: Optional[str] = self.config.get('pattern')
        self.case_sensitive: bool = self.config.get('case_sensitive', False)
        self.exclude: bool = self.config.get('exclude', False)

        errors = self.validate_config()
        if errors:
            raise ValueError(f"Invalid {self.name} configuration: {'; '.join(errors)}")

        flags = 0 if self.case_sensitive else re.IGNORECASE
        self._regex = re.compile(self.pattern, flags) if self.pattern else None
        self._normalized = {self._normalize(a) for a in self.addresses}

    @property
    def name(self) -> str:
        return f"{self.field_name.capitalize()} Filter"

    @property
    def description(self) -> str:
        verb = "not" if self.exclude else ""
        if self._regex is not None:
            target = f"matching /{self.pattern}/"
        else:
            target = f"in {', '.join(self.addresses[:3])}" + ("..." if len(self.addresses) > 3 else "")
        return " ".join(part for part in (self.field_name, verb, target) if part)

    def validate_config(self) -> List[str]:
        errors = []
        if not isinstance(self.addresses, list) or not all(isinstance(a, str) for a in self.addresses):
            return ["'addresses' must be a string or a list of strings"]
        if self.pattern is not None and not isinstance(self.pattern, str):
            return ["'pattern' must be a string"]
        if not self.addresses and not self.pattern:
            errors.append("either 'addresses' or 'pattern' is required")
        if self.addresses and self.pattern:
            errors.append("'addresses' and 'pattern' are mutually exclusive")
        if self.pattern:
            try:
                re.compile(self.pattern)
            except re.error as e:
                errors.append(f"invalid pattern '{self.pattern}': {e}")
        return errors

    def apply(self, message: Message) -> FilterResult:
        address = getattr(message, self.field_name)

        if self._regex is not None:
            matched = self._regex.search(address) is not None
        else:
            matched = self._normalize(address) in self._normalized

        passed = matched != self.exclude
        state = "matches" if matched else "does not match"
        return FilterResult(
            passed=passed,
            reason=f"{self.field_name} '{address}' {state}",
            metadata={'field': self.field_name, 'matched': matched}
        )

    def _normalize(self, address: str) -> str:
        return address if self.case_sensitive else address.lower()


class SenderFilter(AddressFilter):
    """Filter messages on their sender address."""

    field_name = "sender"


class RecipientFilter(AddressFilter):
    """Filter messages on their recipient address."""

    field_name = "recipient"

"""
Error taxonomy for Bristol circuit parsing.

Every parse failure is a BristolFormatError (a ValueError) that records
where it happened and what was expected, so a malformed circuit file can
be debugged from the message alone.
"""

from typing import Any, Dict, List, Optional


class BristolFormatError(ValueError):
    """Base class for all Bristol text parsing failures."""

    kind = "BristolFormatError"

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.line = line
        self.field = field
        self.expected = expected
        self.found = found
        super().__init__(self._render())

    def _render(self) -> str:
        parts = []
        if self.line_number is not None:
            parts.append(f"line {self.line_number}")
        if self.field:
            parts.append(self.field)
        detail = self.message
        if self.expected is not None or self.found is not None:
            detail = f"{self.message}: expected {self.expected}, found {self.found}"
        parts.append(detail)
        return ": ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "detail": str(self),
            "line_number": self.line_number,
            "line": self.line,
            "field": self.field,
            "expected": self.expected,
            "found": self.found,
        }


class StructuralError(BristolFormatError):
    """Too few lines, wrong token count, or a port count that does not match its list."""

    kind = "StructuralError"


class MalformedNumber(BristolFormatError):
    """A token that should be a non-negative 32-bit integer is not."""

    kind = "MalformedNumber"


class ArityMismatch(BristolFormatError):
    """A gate line declares input/output counts that its tag does not allow."""

    kind = "ArityMismatch"


class UnsupportedGateType(BristolFormatError):
    """A known Bristol tag (EQ, EQW, MAND) that this parser does not implement."""

    kind = "UnsupportedGateType"

    def __init__(self, tag: str, **kwargs):
        self.tag = tag
        super().__init__(f"gate type {tag!r} is not implemented", **kwargs)


class UnknownGateType(BristolFormatError):
    """A gate tag outside the Bristol vocabulary."""

    kind = "UnknownGateType"

    def __init__(self, tag: str, **kwargs):
        self.tag = tag
        super().__init__(f"unrecognized gate type {tag!r}", **kwargs)


class CircuitValidationError(ValueError):
    """Raised by ValidationReport.raise_for_issues for a parsed but inconsistent circuit."""

    def __init__(self, issues: List[Any]):
        self.issues = list(issues)
        summary = "; ".join(issue.message for issue in self.issues[:5])
        if len(self.issues) > 5:
            summary += f"; ... ({len(self.issues) - 5} more)"
        super().__init__(f"{len(self.issues)} validation issue(s): {summary}")

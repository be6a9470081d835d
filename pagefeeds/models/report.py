from typing import List

from pydantic import BaseModel, Field


class CheckResult(BaseModel):
    section: str
    description: str
    passed: bool


class ValidationReport(BaseModel):
    checks: List[CheckResult] = Field(default_factory=list)

    def check(self, section: str, description: str, condition: bool) -> bool:
        passed = bool(condition)
        self.checks.append(CheckResult(section=section, description=description, passed=passed))
        return passed

    @property
    def failures(self) -> int:
        return sum(1 for c in self.checks if not c.passed)

    @property
    def ok(self) -> bool:
        return self.failures == 0

    def failed(self) -> List[CheckResult]:
        return [c for c in self.checks if not c.passed]

    def render(self) -> str:
        """Grouped checklist, one section heading per group, then the summary line."""
        lines: List[str] = []
        section = None
        for c in self.checks:
            if c.section != section:
                section = c.section
                lines.append("")
                lines.append(f"{section}:")
            mark = "✓" if c.passed else "✗"
            lines.append(f"  {mark} {c.description}")
        lines.append("")
        lines.append("All checks passed." if self.ok else f"{self.failures} check(s) failed.")
        return "\n".join(lines) + "\n"

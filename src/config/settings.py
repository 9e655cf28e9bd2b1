"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use LINECHECK_ prefix (e.g., LINECHECK_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use LINECHECK_ prefix.

    Examples:
        LINECHECK_CHECK_PREFIX=FOO
        LINECHECK_STRICT_MODE=true
        LINECHECK_STRICT_WHITESPACE=false
    """

    model_config = SettingsConfigDict(
        env_prefix="LINECHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Directive file syntax
    check_prefix: str = Field(
        default="CHECK",
        description="Directive keyword prefix (CHECK, CHECK-NEXT, ...); like FileCheck --check-prefix",
    )

    comment_marker: str = Field(
        default="#",
        description="Lines whose first non-whitespace text starts with this marker are comments",
    )

    directive_leaders: List[str] = Field(
        default_factory=lambda: ["//", ";"],
        description="Line-comment tokens allowed in front of a directive keyword (e.g. '; CHECK: ...')",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: unrecognized directive-file lines raise MalformedDirective",
    )

    # Pattern configuration
    strict_whitespace: bool = Field(
        default=True,
        description="Match literal whitespace exactly; when false, runs of spaces/tabs match [ \\t]+",
    )

    allow_regex_blocks: bool = Field(
        default=False,
        description="Accept arbitrary regular expressions inside {{ }} instead of only {{.*}}",
    )

    # Reporting
    color_diagnostics: bool = Field(
        default=True,
        description="Syntax-highlight the failing directive line in CLI diagnostics",
    )

    def keyword_make(self, suffix: Optional[str] = None) -> str:
        """
        Build the directive keyword for a suffix under the current prefix.

        Args:
            suffix: Directive suffix ("NEXT", "SAME", "NOT") or None for plain CHECK

        Returns:
            Keyword without the trailing colon

        Example:
            >>> settings = AppSettings()
            >>> settings.keyword_make("NEXT")
            'CHECK-NEXT'
            >>> settings.keyword_make()
            'CHECK'
        """
        if not suffix:
            return self.check_prefix
        return f"{self.check_prefix}-{suffix}"

    def leader_strip(self, line: str) -> str:
        """
        Remove one leading directive leader (and whitespace) from a line.

        Args:
            line: Line with leading whitespace already stripped

        Returns:
            Remainder of the line, or the line unchanged if no leader is present

        Example:
            >>> settings = AppSettings()
            >>> settings.leader_strip('; CHECK: foo')
            'CHECK: foo'
        """
        for leader in self.directive_leaders:
            if leader and line.startswith(leader):
                return line[len(leader):].lstrip()
        return line


# Singleton instance - import this in your code
appsettings = AppSettings()

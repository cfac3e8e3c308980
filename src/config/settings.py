"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CLFORMAT_ prefix (e.g., CLFORMAT_DECIMAL_COMMA_CHAR=_).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CLFORMAT_ prefix.

    Examples:
        CLFORMAT_DECIMAL_COMMA_INTERVAL=4
        CLFORMAT_LINE_TERMINATOR="\\r\\n"
        CLFORMAT_JOB_SUFFIX=.out
    """

    model_config = SettingsConfigDict(
        env_prefix="CLFORMAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ~D defaults
    decimal_pad_char: str = Field(
        default=" ",
        description="Pad character for ~D when parameter 1 is omitted",
    )

    decimal_comma_char: str = Field(
        default=",",
        description="Group separator for ~:D when parameter 2 is omitted",
    )

    decimal_comma_interval: int = Field(
        default=3,
        ge=1,
        description="Digits per group for ~:D when parameter 3 is omitted",
    )

    # ~F and ~< defaults
    float_pad_char: str = Field(
        default=" ",
        description="Pad character for ~F when parameter 4 is omitted",
    )

    align_pad_char: str = Field(
        default=" ",
        description="Pad character for ~< when parameter 3 is omitted",
    )

    # Output configuration
    line_terminator: str = Field(
        default="\n",
        description="Text written by the ~% directive",
    )

    # CLI configuration
    job_suffix: str = Field(
        default=".txt",
        description="File suffix for rendered job output written by the CLI",
    )

    @field_validator("decimal_pad_char", "decimal_comma_char", "float_pad_char", "align_pad_char")
    @classmethod
    def char_validate(cls, value: str) -> str:
        """Pad and separator settings must be exactly one character"""
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {value!r}")
        return value


# Singleton instance - import this in your code
appsettings = AppSettings()

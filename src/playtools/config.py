"""
PLAYTOOLS configuration.

Settings are read from ``PLAYTOOLS_*`` environment variables only. AWS profile
details (SSO start URL, account, region) stay in the AWS CLI's own
configuration; this module just maps each environment to a profile name and a
Lambda function name.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from playtools.models import Environment


DEFAULT_FUNCTION_NAME_TEMPLATE = "imx-rewards-{env}-sweepstake-rewards-calculator"


class PlaytoolsConfig(BaseSettings):
    """Runtime settings for the invoker and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYTOOLS_",
        case_sensitive=False,
        extra="ignore",
    )

    dev_profile: str = Field(
        default="platform-nonprod-engineer",
        description="AWS SSO profile used for the development environment",
    )
    prod_profile: str = Field(
        default="platform-prod-engineer",
        description="AWS SSO profile used for the production environment",
    )
    function_name_template: str = Field(
        default=DEFAULT_FUNCTION_NAME_TEMPLATE,
        description="Lambda function name, '{env}' is replaced by the environment",
    )
    aws_cli: str = Field(default="aws", description="Name or path of the AWS CLI executable")
    region: Optional[str] = Field(
        default=None,
        description="Region override, the profile's region is used when unset",
    )
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    log_level: str = Field(default="INFO", description="Log level for the log file")

    @field_validator("function_name_template")
    @classmethod
    def _template_has_placeholder(cls, value: str) -> str:
        if "{env}" not in value:
            raise ValueError("function_name_template must contain '{env}'")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    def profile_for(self, environment: Environment) -> str:
        """Return the AWS profile mapped to ``environment``."""
        environment = Environment(environment)
        if environment is Environment.PROD:
            return self.prod_profile
        return self.dev_profile

    def function_name_for(self, environment: Environment) -> str:
        """Return the Lambda function name for ``environment``."""
        return self.function_name_template.format(env=Environment(environment).value)


def get_config(**overrides) -> PlaytoolsConfig:
    """Load configuration from the environment and apply non-empty CLI overrides."""
    config = PlaytoolsConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        config = config.model_copy(update=updates)
    return config

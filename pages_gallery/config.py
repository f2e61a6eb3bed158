"""Runtime settings resolved from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from pages_gallery.domain.repository import Account, AccountKind


@dataclass(frozen=True)
class Settings:
    """Settings for the discovery, screenshot and gallery scripts."""

    user_account: Optional[str] = "DanielMeixner"
    user_token: Optional[str] = None
    org_account: Optional[str] = None
    org_token: Optional[str] = None
    catalog_path: Path = Path("apps-data.json")
    gallery_output: Path = Path("index.html")
    api_url: str = "https://api.github.com"
    log_level: str = "INFO"

    def accounts(self) -> List[Account]:
        """
        Accounts that have both a name and a credential, individual first.

        An account without a token is left out rather than reported as an error.
        """
        accounts = []
        if self.user_account and self.user_token:
            accounts.append(Account(self.user_account, AccountKind.INDIVIDUAL, self.user_token))
        if self.org_account and self.org_token:
            accounts.append(Account(self.org_account, AccountKind.ORGANIZATION, self.org_token))
        return accounts


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    # Empty strings (e.g. unset GitHub Actions secrets) count as missing
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build settings from environment variables.

    Args:
        dotenv: Load a .env file from the working directory first
    """
    if dotenv:
        load_dotenv()

    return Settings(
        user_account=_env("PAGES_USER_ACCOUNT", "DanielMeixner"),
        user_token=_env("GITHUB_TOKEN"),
        org_account=_env("PAGES_ORG_ACCOUNT"),
        org_token=_env("ORG_GITHUB_TOKEN"),
        catalog_path=Path(_env("CATALOG_PATH", "apps-data.json")),
        gallery_output=Path(_env("GALLERY_OUTPUT", "index.html")),
        api_url=_env("GITHUB_API_URL", "https://api.github.com"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )

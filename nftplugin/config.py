from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from pydantic_settings import BaseSettings, SettingsConfigDict

from nftplugin.models.metadata import DEFAULT_RPM


def _package_version() -> str:
    try:
        return pkg_version("nftplugin")
    except PackageNotFoundError:
        return "0.0.0"


class Settings(BaseSettings):
    """Plugin settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NFTPLUGIN_")

    # Gateway that ipfs:// URIs are rewritten onto
    ipfs_gateway: str = "https://ipfs.io/ipfs/"

    blanknetwork_gateway: str = "https://ipfs.blanknetwork.com/"

    # Requests per minute allowed while walking a collection (0 = unlimited)
    default_rpm: int = DEFAULT_RPM

    request_timeout: float = 30.0

    user_agent: str = f"nftplugin/{_package_version()}"


settings = Settings()

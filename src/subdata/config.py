"""Connection configuration for the Subsonic transport.

Configuration is read from environment variables:

- SUBSONIC_URL: Server base URL (required)
- SUBSONIC_USER: Username (required)
- SUBSONIC_PASSWORD: Password (required unless SUBSONIC_API_KEY is set)
- SUBSONIC_API_KEY: OpenSubsonic API key (optional)
- SUBSONIC_CLIENT_NAME: Client identifier sent as ``c`` (default: subdata)
- SUBSONIC_API_VERSION: API version sent as ``v`` (default: 1.16.1)
"""

import os
import warnings
from dataclasses import dataclass
from typing import Optional


@dataclass
class SubsonicConfig:
    """Configuration for connecting to a Subsonic-compatible server.

    Attributes:
        url: Base server URL (e.g., "https://music.example.com")
        username: Subsonic username
        password: Subsonic password (hashed before transmission)
        api_key: Optional API key for OpenSubsonic servers (alternative to password)
        client_name: Client identifier for API requests
        api_version: Subsonic API version
    """

    url: str
    username: str
    password: Optional[str] = None
    api_key: Optional[str] = None
    client_name: str = "subdata"
    api_version: str = "1.16.1"

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")
        if not self.username:
            raise ValueError("username is required")

        if not self.password and not self.api_key:
            raise ValueError("Either password or api_key must be provided")

        if not self.url.startswith("https://"):
            warnings.warn(
                "Using HTTP instead of HTTPS for Subsonic connection. "
                "Credentials will be transmitted insecurely.",
                UserWarning,
                stacklevel=2,
            )

    @classmethod
    def from_environment(cls) -> "SubsonicConfig":
        """Load configuration from environment variables.

        Returns:
            SubsonicConfig

        Raises:
            EnvironmentError: If required environment variables are missing
            ValueError: If the values are invalid
        """
        required = {
            "SUBSONIC_URL": os.getenv("SUBSONIC_URL"),
            "SUBSONIC_USER": os.getenv("SUBSONIC_USER"),
        }
        password = os.getenv("SUBSONIC_PASSWORD")
        api_key = os.getenv("SUBSONIC_API_KEY")

        missing = [var for var, value in required.items() if not value]
        if not password and not api_key:
            missing.append("SUBSONIC_PASSWORD")

        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export SUBSONIC_URL='https://your-server.com'"
            )

        return cls(
            url=required["SUBSONIC_URL"],
            username=required["SUBSONIC_USER"],
            password=password,
            api_key=api_key,
            client_name=os.getenv("SUBSONIC_CLIENT_NAME", "subdata"),
            api_version=os.getenv("SUBSONIC_API_VERSION", "1.16.1"),
        )

"""Network utilities."""
import platform
import subprocess
from typing import Optional

from loguru import logger


class RouteLookupError(Exception):
    """Raised when the routing table could not be read at all."""

    pass


class NetworkUtils:
    """Utilities for reading the host's network configuration."""

    @staticmethod
    def lookup_default_gateway() -> Optional[str]:
        """
        Read the default gateway from the OS routing table.

        Returns:
            Gateway IP address, or None if the table has no default route

        Raises:
            RouteLookupError: If the route tool is missing or fails
        """
        try:
            system = platform.system()

            if system == "Windows":
                result = subprocess.run(
                    ["route", "print", "0.0.0.0"],
                    capture_output=True,
                    text=True,
                    creationflags=subprocess.CREATE_NO_WINDOW,
                )
                for line in result.stdout.splitlines():
                    parts = line.split()
                    if len(parts) >= 3 and parts[0] == "0.0.0.0":
                        return parts[2]

            elif system == "Darwin":  # macOS
                result = subprocess.run(
                    ["route", "-n", "get", "default"],
                    capture_output=True,
                    text=True,
                )
                for line in result.stdout.splitlines():
                    if "gateway:" in line:
                        return line.split(":", 1)[1].strip()

            else:  # Linux
                result = subprocess.run(
                    ["ip", "route", "show", "default"],
                    capture_output=True,
                    text=True,
                )
                for line in result.stdout.splitlines():
                    if line.startswith("default"):
                        parts = line.split()
                        if len(parts) >= 3:
                            return parts[2]

        except (OSError, subprocess.SubprocessError) as e:
            raise RouteLookupError(f"{type(e).__name__}: {e}") from e

        return None

    @staticmethod
    def get_default_gateway() -> Optional[str]:
        """
        Get the default gateway IP address.

        Returns:
            Gateway IP address or None if not found or not readable
        """
        try:
            return NetworkUtils.lookup_default_gateway()
        except RouteLookupError as e:
            logger.debug(f"[NetworkUtils] Error getting gateway: {e}")
            return None

    @staticmethod
    def has_default_route() -> Optional[bool]:
        """
        The host's own best guess at whether any network is attached.

        Returns:
            True or False from the routing table, None when it could not be read
        """
        try:
            return NetworkUtils.lookup_default_gateway() is not None
        except RouteLookupError as e:
            logger.debug(f"[NetworkUtils] Routing table unavailable: {e}")
            return None

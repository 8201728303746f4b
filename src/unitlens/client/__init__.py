"""HTTP client module for unitlens.

Public API:
    UnitLensClient -- Async client for a remote unitlens server
    ClientError -- Transport or HTTP failure
    RemoteCommandError -- The remote command ran and failed
"""

from unitlens.client.http_client import ClientError, RemoteCommandError, UnitLensClient

__all__ = ["ClientError", "RemoteCommandError", "UnitLensClient"]

"""
Asset provisioning for the external extraction tool.

Usage:
    from ytdl_api.assets import AssetLocations, AssetProvisioner

    provisioner = AssetProvisioner(locations)
    provisioner.ensure_assets()
"""

from .errors import (
    AssetError,
    AssetDownloadError,
)
from .models import (
    AssetLocations,
    default_binary_url,
)
from .provisioner import AssetProvisioner

__all__ = [
    # Errors
    "AssetError",
    "AssetDownloadError",
    # Models
    "AssetLocations",
    "default_binary_url",
    # Provisioning
    "AssetProvisioner",
]

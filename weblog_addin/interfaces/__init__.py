"""
Interfaces package for the weblog metadata add-in.
"""

from .metadata_codec import MetadataCodec

__all__ = ["MetadataCodec"]

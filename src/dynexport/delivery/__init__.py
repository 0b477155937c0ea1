"""
Delivery of export artifacts to S3 under delegated credentials.
"""

from dynexport.delivery.credentials import DelegatedCredential, RoleCredentialProvider
from dynexport.delivery.keys import destination_key
from dynexport.delivery.uploader import DelegatedUploader

__all__ = [
    "DelegatedCredential",
    "RoleCredentialProvider",
    "DelegatedUploader",
    "destination_key",
]

"""
Upload of a finished export artifact with delegated credentials.

Each upload asks the credential provider for a credential that is fresh
beyond the expiry margin, builds an S3 client from it and sends the artifact
as a single PutObject. The credential is discarded afterwards.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dynexport.constants import ARTIFACT_ACL, ARTIFACT_CONTENT_TYPE
from dynexport.delivery.credentials import DelegatedCredential, RoleCredentialProvider
from dynexport.errors import TransferError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[DelegatedCredential, Optional[str]], Any]


def s3_client_for(credential: DelegatedCredential, region: Optional[str]) -> Any:
    return boto3.client(
        "s3",
        aws_access_key_id=credential.access_key_id,
        aws_secret_access_key=credential.secret_access_key,
        aws_session_token=credential.session_token,
        region_name=region,
    )


class DelegatedUploader:
    """
    Puts export artifacts into an S3 bucket under an assumed role.

    Example:
        >>> uploader = DelegatedUploader("exports-bucket", provider, region="eu-west-1")
        >>> uploader.upload("/tmp/dynamo.csv", "dynamo/2024/03/07/TT_20240307141503.csv")
        's3://exports-bucket/dynamo/2024/03/07/TT_20240307141503.csv'
    """

    def __init__(
        self,
        bucket: str,
        credentials: RoleCredentialProvider,
        region: Optional[str] = None,
        client_factory: ClientFactory = s3_client_for,
    ):
        if not bucket:
            raise TransferError("No destination bucket")
        self.bucket = bucket
        self.credentials = credentials
        self.region = region
        self._client_factory = client_factory

    def upload(self, artifact: Union[str, Path], key: str) -> str:
        """
        Transfer the artifact's full content to s3://bucket/key.

        Returns:
            The s3:// URI of the uploaded object

        Raises:
            CredentialError: if the role could not be assumed
            TransferError: if the artifact could not be read or the put failed
        """
        path = Path(artifact)
        try:
            credential = self.credentials.get()
            logger.info("Using identity (%s) for S3 upload of (%s)", self.credentials.role_arn, key)
            client = self._client_factory(credential, self.region)
            try:
                with path.open("rb") as body:
                    size = os.fstat(body.fileno()).st_size
                    client.put_object(
                        Bucket=self.bucket,
                        Key=key,
                        Body=body,
                        ACL=ARTIFACT_ACL,
                        ContentType=ARTIFACT_CONTENT_TYPE,
                    )
            except OSError as exc:
                raise TransferError(f"Unable to read export artifact {path}") from exc
            except (ClientError, BotoCoreError) as exc:
                raise TransferError(f"Failed to upload to s3://{self.bucket}/{key}") from exc
        finally:
            self.credentials.discard()

        uri = f"s3://{self.bucket}/{key}"
        logger.info("Uploaded %s (%d bytes) to %s", path, size, uri)
        return uri

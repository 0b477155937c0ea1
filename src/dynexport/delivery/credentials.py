"""
Delegated credentials via STS role assumption.

The export reads the table with the runtime's own identity but uploads with a
role in the destination account. The primary (static) key pair is only used
to call sts:AssumeRole:

    primary key pair ──AssumeRole(role_arn, duration)──> temporary credential
                                                          (key, secret, token,
                                                           expiration)

A temporary credential is usable only until `expiration - margin`. Inside the
margin it counts as expired and get() performs a new exchange, so a slow
upload never starts with a token about to lapse.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dynexport.constants import (
    CREDENTIAL_DURATION_SECONDS,
    CREDENTIAL_EXPIRY_MARGIN_SECONDS,
    ROLE_SESSION_NAME,
)
from dynexport.errors import CredentialError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DelegatedCredential:
    """Temporary credential returned by sts:AssumeRole."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime

    def is_fresh(self, now: datetime, margin: timedelta) -> bool:
        return now < self.expiration - margin

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return (
            f"DelegatedCredential(access_key_id={self.access_key_id!r}, "
            f"expiration={self.expiration.isoformat()})"
        )


class RoleCredentialProvider:
    """
    Exchanges a primary key pair for short-lived role credentials.

    Example:
        >>> provider = RoleCredentialProvider(key_id, secret, role_arn, region="eu-west-1")
        >>> credential = provider.get()
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        role_arn: str,
        region: Optional[str] = None,
        duration_seconds: int = CREDENTIAL_DURATION_SECONDS,
        expiry_margin_seconds: int = CREDENTIAL_EXPIRY_MARGIN_SECONDS,
        session_name: str = ROLE_SESSION_NAME,
        sts_client: Any = None,
        clock: Clock = utc_now,
    ):
        if not access_key_id or not secret_access_key:
            raise CredentialError("Primary credentials are missing an access key id or secret")
        if not role_arn:
            raise CredentialError("No role to assume")
        if duration_seconds <= expiry_margin_seconds:
            raise CredentialError(
                f"Credential duration {duration_seconds}s must exceed the expiry margin "
                f"{expiry_margin_seconds}s"
            )

        self.role_arn = role_arn
        self.region = region
        self.duration_seconds = duration_seconds
        self.margin = timedelta(seconds=expiry_margin_seconds)
        self.session_name = session_name
        self._clock = clock
        self._sts = sts_client or boto3.client(
            "sts",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )
        self._current: Optional[DelegatedCredential] = None
        self.exchanges = 0

    def get(self) -> DelegatedCredential:
        """Return a credential valid beyond the expiry margin, assuming the role if needed."""
        current = self._current
        if current is not None and current.is_fresh(self._clock(), self.margin):
            return current
        if current is not None:
            logger.info("Delegated credential for %s is within expiry margin; refreshing", self.role_arn)
        self._current = self._assume_role()
        return self._current

    def discard(self) -> None:
        """Forget the cached credential; the next get() assumes the role again."""
        self._current = None

    def _assume_role(self) -> DelegatedCredential:
        try:
            response = self._sts.assume_role(
                RoleArn=self.role_arn,
                RoleSessionName=self.session_name,
                DurationSeconds=self.duration_seconds,
            )
            raw = response["Credentials"]
            credential = DelegatedCredential(
                access_key_id=raw["AccessKeyId"],
                secret_access_key=raw["SecretAccessKey"],
                session_token=raw["SessionToken"],
                expiration=raw["Expiration"],
            )
        except (ClientError, BotoCoreError) as exc:
            raise CredentialError(f"Failed to assume role {self.role_arn}") from exc
        except (KeyError, TypeError) as exc:
            raise CredentialError(f"Malformed AssumeRole response for {self.role_arn}") from exc

        self.exchanges += 1
        if not credential.is_fresh(self._clock(), self.margin):
            raise CredentialError(
                f"AssumeRole for {self.role_arn} returned a credential expiring at "
                f"{credential.expiration.isoformat()}"
            )
        logger.debug("Assumed role %s until %s", self.role_arn, credential.expiration.isoformat())
        return credential

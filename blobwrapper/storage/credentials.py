"""
Credential and Endpoint Resolution

Turns StorageOptions into an authenticated, container-scoped client.

The identity mode depends only on which optional identifiers are set:

    tenant_id  client_id  mode
    ---------  ---------  ----------------------------------
    absent     absent     default credential chain
    present    absent     default chain, scoped to tenant
    absent     present    user-assigned identity
    present    present    user-assigned identity, scoped to tenant

Tokens are fetched lazily by the credential on first use; nothing here
touches the network.

Author: BlobWrapper Team
Date: 2026
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import ContainerClient

from .models import StorageOptions
from .validation import validate_options

logger = logging.getLogger(__name__)

BLOB_SERVICE_DOMAIN = "blob.core.windows.net"

# provider(**kwargs) -> async token credential
CredentialProvider = Callable[..., Any]
# factory(account_url, container_name, credential) -> container client
ContainerClientFactory = Callable[[str, str, Any], Any]


class IdentityMode(str, Enum):
    """Identity requested from the identity provider."""
    DEFAULT_CHAIN = "default_chain"
    TENANT_SCOPED = "tenant_scoped"
    USER_ASSIGNED = "user_assigned"
    USER_ASSIGNED_TENANT_SCOPED = "user_assigned_tenant_scoped"


@dataclass(frozen=True)
class CredentialRequest:
    """Parameters passed to the identity provider."""
    mode: IdentityMode
    tenant_id: Optional[str] = None
    managed_identity_client_id: Optional[str] = None

    def to_kwargs(self) -> Dict[str, str]:
        """Keyword arguments for the identity provider, omitting unset ones."""
        kwargs: Dict[str, str] = {}
        if self.tenant_id:
            kwargs["tenant_id"] = self.tenant_id
        if self.managed_identity_client_id:
            kwargs["managed_identity_client_id"] = self.managed_identity_client_id
        return kwargs


def build_credential_request(options: StorageOptions) -> CredentialRequest:
    """Select the identity mode for the given options."""
    tenant_id = options.tenant_id
    client_id = options.client_id

    if client_id and tenant_id:
        mode = IdentityMode.USER_ASSIGNED_TENANT_SCOPED
    elif client_id:
        mode = IdentityMode.USER_ASSIGNED
    elif tenant_id:
        mode = IdentityMode.TENANT_SCOPED
    else:
        mode = IdentityMode.DEFAULT_CHAIN

    return CredentialRequest(
        mode=mode,
        tenant_id=tenant_id,
        managed_identity_client_id=client_id,
    )


def build_account_url(account_name: str) -> str:
    """Blob service endpoint for a storage account."""
    return f"https://{account_name}.{BLOB_SERVICE_DOMAIN}"


def default_credential_provider(**kwargs: Any) -> Any:
    """Create an ``azure.identity.aio.DefaultAzureCredential``."""
    return DefaultAzureCredential(**kwargs)


def default_client_factory(account_url: str, container_name: str, credential: Any) -> Any:
    """Create an ``azure.storage.blob.aio.ContainerClient``."""
    return ContainerClient(account_url, container_name, credential=credential)


def resolve_container_handle(
    options: Optional[StorageOptions],
    credential_provider: Optional[CredentialProvider] = None,
    client_factory: Optional[ContainerClientFactory] = None,
) -> Tuple[Any, Any]:
    """
    Validate options and build the container client and its credential.

    Args:
        options: Connection options
        credential_provider: Identity provider; DefaultAzureCredential if None
        client_factory: Container client factory; ContainerClient if None

    Returns:
        Tuple of (container client, credential)

    Raises:
        InvalidConfigurationError: If account or container name is missing
    """
    options = validate_options(options)
    provider = credential_provider or default_credential_provider
    factory = client_factory or default_client_factory

    request = build_credential_request(options)
    credential = provider(**request.to_kwargs())

    account_url = build_account_url(options.account_name)
    client = factory(account_url, options.container_name, credential)

    logger.debug(
        f"Resolved container '{options.container_name}' at {account_url} "
        f"(identity mode: {request.mode.value})"
    )
    return client, credential

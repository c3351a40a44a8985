"""DynamoDB Local binary provisioning."""
from local_dynamodb.binaries.provisioner import (
    provision_binary,
    resolve_install_dir,
    resolve_source,
)
from local_dynamodb.binaries.fs import path_exists

__all__ = [
    "provision_binary",
    "resolve_install_dir",
    "resolve_source",
    "path_exists",
]

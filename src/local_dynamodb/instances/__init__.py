"""DynamoDB Local process lifecycle."""
from local_dynamodb.instances.manager import InstanceManager, create_instance

__all__ = ["InstanceManager", "create_instance"]

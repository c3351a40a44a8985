"""DynamoDB Local download locations and on-disk layout."""

DEFAULT_DOWNLOAD_URL = (
    "https://d1ni2b6xgvw0s0.cloudfront.net/v2.x/dynamodb_local_latest.zip"
)

# Relative to the working directory
INSTALL_DIR_NAME = ".local_dynamo"

# Raw archive name when extraction is skipped
ARCHIVE_FILENAME = "dynamodb_local_latest.zip"

# Relative to the install directory
JAR_NAME = "DynamoDBLocal.jar"
LIB_DIR_NAME = "DynamoDBLocal_lib"

DOWNLOAD_CHUNK_SIZE = 8192

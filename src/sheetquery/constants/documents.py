"""Document store constants and enumerations.

This module describes how uploaded spreadsheet data is laid out in the
document store: which container holds it, which attribute routes a file's
rows to the same partition, and which discriminator values separate data
rows from import metadata records.
"""

from enum import Enum


class DocumentType(str, Enum):
    """Logical kind of a stored document.

    Values:
        ROW: One spreadsheet row (``excel-row``)
        IMPORT: Metadata record describing one uploaded file (``excel-import``)
    """

    ROW = "excel-row"
    IMPORT = "excel-import"


class CosmosAuthMethod(str, Enum):
    """Authentication method for Cosmos DB access.

    Values:
        ACCESS_KEY: Account key authentication
        MANAGED_IDENTITY: Azure AD authentication through DefaultAzureCredential
    """

    ACCESS_KEY = "access_key"
    MANAGED_IDENTITY = "managed_identity"


class PaginationMode(str, Enum):
    """Where limit/offset are applied for paged reads.

    Values:
        IN_MEMORY: Materialize the full filtered result, then slice
        PUSH_DOWN: Append ``OFFSET ... LIMIT ...`` to the statement
    """

    IN_MEMORY = "in_memory"
    PUSH_DOWN = "push_down"


DEFAULT_CONTAINER = "excel-records"
DEFAULT_PARTITION_KEY_PATH = "/_partitionKey"

# Document attributes
DOCUMENT_TYPE_ATTRIBUTE = "documentType"
PARTITION_KEY_ATTRIBUTE = "_partitionKey"
IMPORT_ID_ATTRIBUTE = "_importId"
DOCUMENT_ID_ATTRIBUTE = "id"
HEADERS_ATTRIBUTE = "headers"
FILE_NAME_ATTRIBUTE = "fileName"

# Prefix every stored import id carries
IMPORT_ID_PREFIX = "import_"

# Partition holding import metadata records, excluded from unscoped row scans
IMPORTS_PARTITION = "imports"

# Attributes projected for import metadata listings
IMPORT_SUMMARY_ATTRIBUTES = (
    "id",
    "fileName",
    "processedAt",
    "blobUrl",
    "totalRows",
    "fileSize",
    "_importId",
)

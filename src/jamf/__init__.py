"""jamf - validators that can hand back native BSON values.

jamf validates ObjectId and DBRef inputs given as native ``bson`` objects,
strings or Extended JSON mappings, and returns them either as plain Python
values or, with ``parse_to_bson``, as native ``bson`` objects.
"""

__version__ = "0.2.0"
__author__ = "jamf contributors"
__description__ = "BSON-aware validators with shared sync/async parse contexts"

from jamf.bson_types import (
    DBRefSchemaInput,
    InstanceOf,
    JamfDBRef,
    JamfObjectId,
    ObjectIdSchemaInput,
    code,
    dbref,
    objectid,
    regex,
)
from jamf.config import JamfConfig, ParseParams, load_config
from jamf.types import JamfFirstPartyTypeKind, JamfType, JamfTypeDef
from jamf.validation import (
    Issue,
    IssueCode,
    JamfError,
    JamfInternalError,
    SafeParseFailure,
    SafeParseSuccess,
    set_error_map,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # Validators
    "DBRefSchemaInput",
    "InstanceOf",
    "JamfDBRef",
    "JamfObjectId",
    "ObjectIdSchemaInput",
    "code",
    "dbref",
    "objectid",
    "regex",
    # Base type
    "JamfFirstPartyTypeKind",
    "JamfType",
    "JamfTypeDef",
    # Configuration
    "JamfConfig",
    "ParseParams",
    "load_config",
    # Results and errors
    "Issue",
    "IssueCode",
    "JamfError",
    "JamfInternalError",
    "SafeParseFailure",
    "SafeParseSuccess",
    "set_error_map",
]
